# -*- coding: utf-8 -*-
"""
Log sinks for qprotocol clients.

The library itself only emits through loguru's `logger`; nothing is written
until an application calls `start_client_log`.

Every exchange with QServer is also logged at TRACE with ``traffic`` bound in
the record's extras. `add_traffic_sink` writes only those records, giving a
plain request/response transcript next to (or instead of) the normal log.
"""

import os
import pathlib
import sys
import traceback

from loguru import logger

from .defaults import DEFAULT_LOGLEVEL, SINGLE_LINE_ERR_LOG

TRAFFIC_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[direction]} {message}"

_log_path = ""

traffic_logger = logger.bind(traffic=True)


def format_error_response():
    err_str = traceback.format_exc()
    if SINGLE_LINE_ERR_LOG:
        return "\t".join(line.strip() for line in err_str.splitlines())
    else:
        return err_str


def _is_traffic(record) -> bool:
    return record["extra"].get("traffic", False)


def _not_traffic(record) -> bool:
    return not _is_traffic(record)


def start_client_log(
    log_to_file=True,
    log_to_stdout=False,
    log_path=None,
    clear_prev=True,
    log_level=DEFAULT_LOGLEVEL,
):
    """Replace loguru's default sink with the client's own.

    Traffic records are kept out of these sinks, see `add_traffic_sink`.

    Arguments
    ---------
    log_to_file : bool
        Write to `log_path`.
    log_to_stdout : bool
        Write to stderr, colourised.
    log_path : str, optional
        Defaults to `log_default_path_client()`.
    clear_prev : bool
        Remove a log left over from an earlier run first.
    log_level : str
        Minimum level for both sinks.
    """
    global _log_path

    if not log_path:
        log_path = log_default_path_client()
    else:
        log_path = os.path.abspath(log_path)

    if clear_prev and log_to_file:
        clear_log(log_path)

    # first remove (default) stderr output
    logger.remove()

    if log_to_file:
        logger.add(
            log_path,
            level=log_level,
            enqueue=True,
            colorize=False,
            filter=_not_traffic,
        )
        _log_path = log_path
    if log_to_stdout:
        logger.add(
            sys.stderr,
            level=log_level,
            enqueue=True,
            colorize=True,
            filter=_not_traffic,
        )
    if log_to_file:
        logger.info("Client log started at {}", log_path)
    else:
        logger.info("Client log started.")


def add_traffic_sink(traffic_path, clear_prev=True) -> int:
    """Record every request sent to and response read from QServer.

    Returns the loguru handler id, which `logger.remove` accepts.
    """
    traffic_path = os.path.abspath(traffic_path)
    if clear_prev:
        clear_log(traffic_path)
    handler_id = logger.add(
        traffic_path,
        level="TRACE",
        format=TRAFFIC_FORMAT,
        filter=_is_traffic,
        enqueue=True,
        colorize=False,
    )
    logger.debug("Recording QServer traffic to {}", traffic_path)
    return handler_id


def log_default_path_client() -> str:
    return str(pathlib.Path.home().joinpath(".qprotocol/client.log"))


def clear_log(log_path: str):
    """
    Clear the logger file at the given path. Missing files are ignored.

    Arguments
    ---------
    log_path : str
        The path to the logger file. Can get logger default path with
        log_default_path_client().
    """
    if os.path.exists(log_path):
        try:
            os.remove(log_path)
        except PermissionError:
            logger.error("Could not clear log file {}. Permission denied.", log_path)


def shutdown_client_log():
    """Flush queued records and remove every sink."""
    global _log_path
    logger.info("Closing down client log.")
    logger.complete()
    logger.remove()
    _log_path = ""


def get_log_filename() -> str:
    """Path of the client log file, empty when not logging to a file."""
    return _log_path


def log_traffic(direction: str, message: str, *args):
    """Emit one traffic record, ``->`` for requests and ``<-`` for responses."""
    traffic_logger.bind(direction=direction).opt(depth=1).trace(message, *args)
