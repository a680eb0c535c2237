"""Tests - OTP Merkle-membership circuit test suite."""
