"""
Base exceptions for abbrex.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from AbbrexUserError.

Programming errors and bugs should NOT inherit from AbbrexUserError;
they will propagate with full tracebacks. GenerationContractError is one of
them: it means a tree builder or a template generator broke its contract.
"""

from __future__ import annotations


class AbbrexUserError(Exception):
    """
    Base class for all user-facing errors in abbrex.

    These errors indicate problems that the user can fix:
    malformed configuration, unreadable tree descriptions, etc.
    """
    pass


class GenerationContractError(RuntimeError):
    """
    Нарушение контракта генерации.

    Возникает, когда у токена нет ни шаблона по умолчанию, ни генератора,
    или когда генератор без поддержки разметки получает разметочный токен.
    Не восстанавливается: прерывает всё раскрытие.
    """
    pass


__all__ = ["AbbrexUserError", "GenerationContractError"]
