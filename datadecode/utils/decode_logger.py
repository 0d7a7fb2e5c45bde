#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Structured logging for decode tracing and debugging.

Decode Logger
=============

Provides utilities for tracing decoder decisions with rich context, making
it easier to see which resolver handled a value and why a field came back
absent or unrecognized.

The logger is carried on ``DecodeState`` so each decode call can be traced
into its own sink; nothing here is process-wide beyond the standard logger
hierarchy rooted at ``datadecode``.
"""

import logging
from pathlib import Path

from datadecode.config import LOGGER_NAME


TRACE_LOGGER = "decode"
"""Child logger carrying decoder events (``datadecode.decode``)."""


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the datadecode hierarchy."""
    full_name = f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route datadecode records to stderr and an optional log file.

    Command line messages stay at INFO regardless of ``verbose``. Decoder
    tracing under ``datadecode.decode`` is held at WARNING, so unrecognized
    types still show, and opens to DEBUG only when ``verbose`` is set.

    Args:
        verbose: Emit per-value decoder tracing
        log_file: Optional file receiving every emitted record with
            timestamps and logger names

    Returns:
        The configured top-level datadecode logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    get_logger(TRACE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
        logger.addHandler(sink)

    return logger


class DecodeLogger:
    """Structured logging for decoder dispatch and region reads.

    Wraps a standard logger with formatted helpers for each decoder event.
    All events are emitted at DEBUG level except ``log_unrecognized``, which
    is a WARNING so partial results are visible without verbose tracing.

    Attributes:
        logger: Underlying standard library logger
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the decode logger.

        Args:
            logger: Logger to emit to (default: ``datadecode.decode``)
        """
        self.logger = logger if logger is not None else get_logger(TRACE_LOGGER)

    def log_dispatch(self, resolver: str, type_identifier: str, location: object) -> None:
        """Log which resolver handles a type and location."""
        self.logger.debug("%-8s %s @ %r", resolver, type_identifier, location)

    def log_unrecognized(self, where: str, type_identifier: str) -> None:
        """Log a type class (or reference category) not handled at a call site.

        Args:
            where: Call site ("value", "memory", "storage", "reference")
            type_identifier: Identifier of the unhandled type
        """
        self.logger.warning("Unknown %s type: %s", where, type_identifier)

    def log_absent(self, type_identifier: str, slot: int) -> None:
        """Log a storage slot that was never written."""
        self.logger.debug("storage slot 0x%x absent for %s", slot, type_identifier)

    def log_memory_payload(
        self, type_identifier: str, pointer: int, header: int, length: int
    ) -> None:
        """Log a memory payload slice derived from its header word.

        Args:
            type_identifier: Identifier of the decoded type
            pointer: Memory offset of the header word
            header: Header value (string length or array element count)
            length: Number of payload bytes sliced after the header
        """
        self.logger.debug(
            "memory %s pointer 0x%x header=%d -> %d bytes",
            type_identifier,
            pointer,
            header,
            length,
        )

    def log_storage_packing(
        self, type_identifier: str, slot: int, inline: bool, length: int
    ) -> None:
        """Log the storage packing case chosen for a slot.

        Args:
            type_identifier: Identifier of the decoded type
            slot: Base slot of the value
            inline: True if the payload lives in the base slot itself
            length: Payload length in bytes
        """
        layout = "inline" if inline else "family"
        self.logger.debug(
            "storage %s slot 0x%x [%s] %d bytes", type_identifier, slot, layout, length
        )

    def log_struct_member(
        self, index: int, name: str, type_identifier: str, relocated: bool
    ) -> None:
        """Log a struct member about to be decoded.

        Args:
            index: Member position (word index from the struct pointer)
            name: Member name
            type_identifier: Identifier of the (possibly relocated) member type
            relocated: True if the member was redescribed as memory-resident
        """
        moved = " (relocated to memory)" if relocated else ""
        self.logger.debug("member %d %s: %s%s", index, name, type_identifier, moved)
