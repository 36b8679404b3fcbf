# -*- coding: utf-8 -*-
"""Utility modules."""

from rundeck_pushover.utils.validation import is_blank, mask_token, truncate

__all__ = ["is_blank", "mask_token", "truncate"]
