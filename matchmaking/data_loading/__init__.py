"""Data loading module for member profile exports."""

from .loaders import (
    load_profiles,
    load_profiles_frame,
    frame_to_profiles,
    validate_profile_columns,
    filter_by_role,
)

__all__ = [
    "load_profiles",
    "load_profiles_frame",
    "frame_to_profiles",
    "validate_profile_columns",
    "filter_by_role",
]
