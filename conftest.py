pytest_plugins = ["symbuild.test_utils.fixtures"]
