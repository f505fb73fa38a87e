"""Pipeline stages.

The stage value doubles as the artifact suffix
(`bitwarden.<email>.<stage>.json`) and as the prefix of error messages,
so both layers share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class Stage(str, Enum):
    """Stages of an export run, in execution order."""

    PRELOGIN = "prelogin"
    TOKEN = "token"
    PROFILE = "profile"
    SYNC = "sync"

    @classmethod
    def ordered(cls) -> tuple["Stage", ...]:
        """Return the stages in the order the pipeline runs them."""

        return (cls.PRELOGIN, cls.TOKEN, cls.PROFILE, cls.SYNC)

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return {
            Stage.PRELOGIN: "Prelogin (KDF)",
            Stage.TOKEN: "Token exchange",
            Stage.PROFILE: "Profile",
            Stage.SYNC: "Vault sync",
        }[self]
