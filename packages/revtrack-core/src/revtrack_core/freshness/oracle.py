"""Deciding whether a modification time falls after a checkpoint."""

from __future__ import annotations

import math
import sys
from enum import Enum
from typing import Literal


class ComparisonPolicy(str, Enum):
    """How modification times are compared against a checkpoint.

    ``coarse`` is for file systems that store whole-second mtimes (HFS+):
    the mtime is rounded up and the checkpoint down, so an edit saved within
    the same second as the checkpoint is still reported.
    """

    default = "default"
    coarse = "coarse"


PolicySetting = Literal["auto", "default", "coarse"]


def is_newer(
    mtime: float,
    checkpoint: float,
    policy: ComparisonPolicy = ComparisonPolicy.default,
) -> bool:
    """Return True if a file modified at *mtime* changed at or after *checkpoint*.

    Equal times count as newer under both policies.
    """
    if policy == ComparisonPolicy.coarse:
        return math.ceil(mtime) >= math.floor(checkpoint)
    return mtime >= checkpoint


def policy_for_platform(platform: str | None = None) -> ComparisonPolicy:
    """Pick the comparison policy for a ``sys.platform`` value."""
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return ComparisonPolicy.coarse
    return ComparisonPolicy.default


def resolve_policy(setting: PolicySetting | ComparisonPolicy) -> ComparisonPolicy:
    """Turn a config setting into a concrete policy; ``auto`` asks the platform."""
    if isinstance(setting, ComparisonPolicy):
        return setting
    if setting == "auto":
        return policy_for_platform()
    return ComparisonPolicy(setting)
