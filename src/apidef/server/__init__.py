"""apidef server: route definitions, configuration and the command line."""
