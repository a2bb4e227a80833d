"""
Form state management for the RegForm GUI.

This module defines the submission states shared by the form controller
and the widgets that render it.
"""

from enum import Enum, auto


class FormState(Enum):
    """
    Enumeration of form submission states.

    A submission always passes through SUBMITTING and ends in either
    ACCEPTED or REJECTED; editing any field returns the form to EDITING.
    """

    EDITING = auto()  # User is entering data
    SUBMITTING = auto()  # Validation in progress
    ACCEPTED = auto()  # Submission passed validation
    REJECTED = auto()  # Submission failed validation, errors shown
