"""Shared utilities: identifiers, scopes, union-find, locations, pools and diagnostics."""