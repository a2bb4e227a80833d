"""
Reusable GUI widgets for the RegForm application.

This module contains the widgets that render the registration form.
"""

from .registration_form import RegistrationFormWidget

__all__ = ["RegistrationFormWidget"]
