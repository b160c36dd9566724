"""abstract base classes of typedpipe components"""
