"""Services Layer - the relay handler orchestrating core and infrastructure."""
