# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/errors.py
class FabricError(RuntimeError):
    """Base class for failures reported to the operator as a single message."""


class ConfigurationError(FabricError):
    """Invalid flags, addresses, routes or config files. Never retried."""


class ConfirmationRequiredError(FabricError):
    """A destructive action needs --yes because nobody can answer a prompt."""


class AddressInUseError(FabricError):
    """The local bind address for an inlet is already taken."""


class InletRejectedError(FabricError):
    """The node answered an inlet request with a bad-request status."""


class InletCreationError(FabricError):
    """The node could not create the inlet and retrying is disabled."""


class InletTimeoutError(FabricError):
    """The overall deadline for inlet creation expired."""


class NodeNotFoundError(FabricError):
    """No persisted record exists for the requested node."""


class NodeDeletionError(FabricError):
    """Terminating a node or removing its state failed."""
