from os.path import join, split

path_to_testdata = split(__file__)[0]

path_to_config = join(path_to_testdata, "config/config.yml")
path_to_alternative_config = join(path_to_testdata, "config/config2.yml")
path_to_invalid_config = join(path_to_testdata, "config/config-invalid.yml")
path_to_unknown_type_config = join(path_to_testdata, "config/config-unknown-type.yml")
path_to_text_config = join(path_to_testdata, "config/config-text.yml")

path_to_numeric_inputs = join(path_to_testdata, "inputs/numbers.yml")
path_to_keyed_inputs = join(path_to_testdata, "inputs/keyed_numbers.yml")
path_to_text_inputs = join(path_to_testdata, "inputs/words.json")
path_to_scalar_inputs = join(path_to_testdata, "inputs/scalar.yml")
