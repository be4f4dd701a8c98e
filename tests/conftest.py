pytest_plugins = ["catalog_search.testing.fixtures"]
