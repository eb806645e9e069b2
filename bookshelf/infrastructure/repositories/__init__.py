# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .books import SqlAlchemyBookRepository
from .sessions import SqlAlchemySessionStore
from .users import SqlAlchemyUserRepository

__all__ = ["SqlAlchemyBookRepository", "SqlAlchemySessionStore", "SqlAlchemyUserRepository"]
