# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Custom exceptions for the implements package.

Structural and match problems are never raised; they are collected into a
DiagnosticReport. These exceptions cover caller misuse and the CLI glue.
"""


class ImplementsError(Exception):
    """Base exception for implements related errors."""
    pass


class InvocationError(ImplementsError):
    """Exception raised when the engine is called incorrectly."""
    pass


class ConfigurationError(ImplementsError):
    """Exception raised for invalid settings files or values."""
    pass


class ReferenceLoadError(ImplementsError):
    """Exception raised when a 'module:attribute' reference cannot be loaded."""
    pass
