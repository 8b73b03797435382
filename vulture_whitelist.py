# Vulture whitelist for false positives
# https://github.com/jendrikseipp/vulture#whitelisting
# ruff: noqa: F841

# click registers these commands through decorators
check = None  # gtfsrt_validator.cli.check
list_rules_command = None  # gtfsrt_validator.cli.list_rules_command

# Public API read by library callers, not by the package itself
has_reference = None  # ValidationContext.has_reference
previous = None  # ValidationContext.previous, hook for cross-fetch rules
route_ids = None  # ReferenceMetadata.route_ids
route_short_name = None  # Route.route_short_name
service_id = None  # Trip.service_id

# Test fixtures - pytest injects these, vulture doesn't understand
clean_env = None  # autouse fixture in tests/conftest.py
capsys = None  # pytest built-in fixture
caplog = None  # pytest built-in fixture
