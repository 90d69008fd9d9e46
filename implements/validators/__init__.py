"""Validators for interface declarations and their member names."""

from .interface_validator import InterfaceValidator, interface_validator
from .naming import is_constant_name, is_function_name

__all__ = ['InterfaceValidator', 'interface_validator', 'is_constant_name', 'is_function_name']
