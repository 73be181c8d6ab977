"""Test suite for the hera-testing package.

This package contains unit and integration tests validating document
parsing, schema validation, template resolution, the runner contract
and business oracles.
"""
