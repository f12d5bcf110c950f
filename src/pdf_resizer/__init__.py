# SPDX-License-Identifier: Apache-2.0
"""Rescale PDF pages to a smaller paper size for printing."""

__version__ = "0.1.0"
