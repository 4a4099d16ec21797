"""
Install Dispatcher - hands a package install request to the host.

Dispatch is fire-and-forget: the storefront never learns whether the
host accepted, queued or rejected the request.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntFlag
from typing import Optional
from urllib.parse import urlparse

from common.exceptions import InvalidPackageError, InstallHandlerError
from common.logging_config import LogContext

from .models import App

logger = logging.getLogger(__name__)

ACTION_VIEW = "android.intent.action.VIEW"
PACKAGE_MIME_TYPE = "application/vnd.android.package-archive"


class IntentFlag(IntFlag):
    """Launch flags understood by the package installer."""
    GRANT_READ_URI_PERMISSION = 0x00000001
    ACTIVITY_NEW_TASK = 0x10000000


@dataclass(frozen=True)
class InstallRequest:
    """An open/view request for an installable package."""
    uri: str
    action: str = ACTION_VIEW
    mime_type: str = PACKAGE_MIME_TYPE
    flags: IntentFlag = IntentFlag.ACTIVITY_NEW_TASK | IntentFlag.GRANT_READ_URI_PERMISSION


class InstallHandler(ABC):
    """Base class for host install mechanisms."""

    @abstractmethod
    def submit(self, request: InstallRequest) -> None:
        """
        Hand a request to the host without waiting for it.

        Raises:
            InstallHandlerError: If the host mechanism could not be started.
        """
        pass


class XdgOpenHandler(InstallHandler):
    """
    Opens the package with a desktop handler.

    The request's MIME type picks the handler: the application registered
    for it with xdg-mime is launched through gtk-launch. Without such a
    registration the URI goes to xdg-open, which then guesses the type from
    the resource itself. The launch runs in a new session (the desktop
    counterpart of ACTIVITY_NEW_TASK); read permission has no desktop
    equivalent since the handler receives the URI directly.
    """

    def __init__(
        self,
        command: str = "xdg-open",
        launcher: str = "gtk-launch",
        query_timeout: float = 5.0,
    ):
        self.command = command
        self.launcher = launcher
        self.query_timeout = query_timeout

    def default_handler_for(self, mime_type: str) -> Optional[str]:
        """Desktop entry registered for a MIME type, if any."""
        try:
            result = subprocess.run(
                ["xdg-mime", "query", "default", mime_type],
                capture_output=True,
                text=True,
                timeout=self.query_timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"xdg-mime query failed: {e}")
            return None

        desktop_id = result.stdout.strip()
        if result.returncode != 0 or not desktop_id:
            return None
        return desktop_id

    def build_command(self, request: InstallRequest) -> list[str]:
        desktop_id = self.default_handler_for(request.mime_type)
        if desktop_id:
            return [self.launcher, desktop_id, request.uri]
        logger.debug(f"No handler registered for {request.mime_type}, using {self.command}")
        return [self.command, request.uri]

    def submit(self, request: InstallRequest) -> None:
        cmd = self.build_command(request)
        try:
            # New session so the handler outlives us, never waited on
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise InstallHandlerError(request.uri, str(e), cause=e) from e


class AdbInstallHandler(InstallHandler):
    """Starts the package installer on a connected Android device over adb."""

    def __init__(self, serial: Optional[str] = None, adb: str = "adb"):
        self.serial = serial
        self.adb = adb

    def build_command(self, request: InstallRequest) -> list[str]:
        cmd = [self.adb]
        if self.serial:
            cmd += ["-s", self.serial]
        cmd += [
            "shell", "am", "start",
            "-a", request.action,
            "-d", request.uri,
            "-t", request.mime_type,
            "-f", str(int(request.flags)),
        ]
        return cmd

    def submit(self, request: InstallRequest) -> None:
        try:
            subprocess.Popen(
                self.build_command(request),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise InstallHandlerError(request.uri, str(e), cause=e) from e


def validate_package_url(app: App) -> None:
    """
    Check that an app carries an absolute package reference.

    Raises:
        InvalidPackageError: If apk_url is empty or has no scheme.
    """
    url = app.apk_url.strip()
    if not url:
        raise InvalidPackageError(app.id, "apk_url is empty")

    parsed = urlparse(url)
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise InvalidPackageError(app.id, f"apk_url is not an absolute reference: {url}")


class InstallDispatcher:
    """
    Translates a selected app into one install request.

    Each call produces exactly one request; nothing is retried.
    """

    def __init__(self, handler: Optional[InstallHandler] = None):
        self.handler = handler or XdgOpenHandler()

    def build_request(self, app: App) -> InstallRequest:
        """Build the install request for an app."""
        validate_package_url(app)
        return InstallRequest(uri=app.apk_url)

    def dispatch_install(self, app: App) -> None:
        """
        Send an install request for an app to the host.

        Raises:
            InvalidPackageError: If the app has no usable package reference.
        """
        try:
            request = self.build_request(app)
        except InvalidPackageError as e:
            logger.error(f"Install rejected: {e}")
            raise

        with LogContext(app_id=app.id, uri=request.uri):
            logger.info(f"Dispatching install for {app.name}")
            try:
                self.handler.submit(request)
            except InstallHandlerError as e:
                logger.error(f"Install dispatch failed: {e}")
