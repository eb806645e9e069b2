# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.credential_verifier import CredentialVerifier
from .services.session_manager import SessionManager

__all__ = ["CredentialVerifier", "SessionManager"]
