# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/fabricctl/inlet/client.py

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Optional, Protocol

import requests
from pydantic import ValidationError

from .models import Failed, InletStatus, Reply, Successful

log = logging.getLogger("fabricctl")


class NodeControlChannel(Protocol):
    """
    Contract for asking a running node to open an inlet.
    """

    async def create_inlet(
        self,
        bind_addr: str,
        route: str,
        alias: Optional[str],
        authorized: Optional[str],
        connection_wait: timedelta,
    ) -> Reply: ...


class HttpNodeClient:
    """
    Talks to a node's control API over HTTP. The blocking ``requests`` call
    runs on a worker thread so the progress reporter keeps running.
    """

    def __init__(
        self,
        api_address: str,
        *,
        request_timeout: timedelta = timedelta(seconds=10),
        deadline: Optional[timedelta] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = f"http://{api_address}"
        self.request_timeout = request_timeout
        self.deadline = deadline
        self.session = session or requests.Session()

    async def create_inlet(
        self,
        bind_addr: str,
        route: str,
        alias: Optional[str],
        authorized: Optional[str],
        connection_wait: timedelta,
    ) -> Reply:
        body = {
            "bind_addr": bind_addr,
            "outlet_route": route,
            "alias": alias,
            "authorized": authorized,
            "wait_for_outlet_ms": int(connection_wait.total_seconds() * 1000),
        }
        return await asyncio.to_thread(self._post, "/node/inlet", body, connection_wait)

    def _post(self, path: str, body: dict, connection_wait: timedelta) -> Reply:
        # the node may hold the request open while it waits for the outlet
        wait = connection_wait.total_seconds() + self.request_timeout.total_seconds()
        if self.deadline:
            wait = min(wait, self.deadline.total_seconds())

        url = self.base_url + path
        log.debug("POST %s %s", url, body)
        try:
            resp = self.session.post(url, json=body, timeout=wait)
        except requests.RequestException as exc:
            return Failed(message=f"node unreachable: {exc}")

        if resp.status_code in (200, 201):
            try:
                return Successful(InletStatus.model_validate(resp.json()))
            except (ValueError, ValidationError) as exc:
                return Failed(message=f"invalid inlet status from node: {exc}")

        return Failed(message=_error_message(resp), status=resp.status_code)


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text.strip() or resp.reason or f"HTTP {resp.status_code}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {resp.status_code}"
