# SPDX-License-Identifier: MIT
"""Configuration loading."""
