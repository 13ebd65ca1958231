"""Shared test fixtures: example domain, misconfigured providers, scanners."""
