# SPDX-License-Identifier: MIT
"""Core resolution machinery."""
