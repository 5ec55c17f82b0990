"""DigitalOcean client for creating Droplets and waiting for them to boot"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable

from azure.core.exceptions import AzureError
from pydo import Client

from droplet_form.config import DEFAULT_MAX_POLL_FAILURES, DEFAULT_POLL_INTERVAL, DEFAULT_WAIT_TIMEOUT
from droplet_form.console import log_debug, log_status, log_warning
from droplet_form.errors import DropletLookupError, ReadinessError, RequestError
from droplet_form.form import CreationRequest

ACTION_COMPLETED = "completed"
ACTION_ERRORED = "errored"
ACTION_IN_PROGRESS = "in-progress"


@dataclass
class Droplet:
    """The parts of a Droplet resource the form reports back"""

    id: int
    name: str
    region: dict[str, Any] = field(default_factory=dict)
    size: dict[str, Any] = field(default_factory=dict)
    networks: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Droplet:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            region=data.get("region") or {},
            size=data.get("size") or {},
            networks=data.get("networks"),
        )

    @property
    def region_name(self) -> str:
        return self.region.get("name") or self.region.get("slug", "")

    @property
    def size_slug(self) -> str:
        return self.size.get("slug", "")

    @property
    def price_monthly(self) -> float:
        return float(self.size.get("price_monthly") or 0.0)

    def _ipv4(self, network_type: str) -> str:
        if not self.networks:
            raise DropletLookupError(f"Droplet {self.id} has no networks")
        for network in self.networks.get("v4") or []:
            if network.get("type") == network_type and network.get("ip_address"):
                return network["ip_address"]
        raise DropletLookupError(f"Droplet {self.id} has no {network_type} IPv4 address")

    def public_ipv4(self) -> str:
        return self._ipv4("public")

    def private_ipv4(self) -> str:
        return self._ipv4("private")


def _describe(error: Exception) -> str:
    message = getattr(error, "message", None) or str(error)
    return f"{error.__class__.__name__}: {message}"


class DigitalOceanClient:
    """pydo wrapper exposing create, wait-until-active and get"""

    def __init__(
        self,
        token: str,
        wait_timeout: float = DEFAULT_WAIT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_poll_failures: int = DEFAULT_MAX_POLL_FAILURES,
        client: Any | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client: Any = client if client is not None else Client(token=token)
        self.wait_timeout: float = wait_timeout
        self.poll_interval: float = poll_interval
        self.max_poll_failures: int = max_poll_failures
        self._sleep: Callable[[float], None] = sleep
        self._clock: Callable[[], float] = clock

    def create(self, request: CreationRequest) -> tuple[Droplet, int]:
        """Create a Droplet; returns it together with the ID of its create action"""
        log_status(f"Creating Droplet {request.name} in {request.region} ({request.size}, image {request.image})")
        try:
            response: dict[str, Any] = self.client.droplets.create(body=request.to_body())
        except AzureError as e:
            raise RequestError(_describe(e)) from e

        droplet = Droplet.from_dict(response["droplet"])
        actions = (response.get("links") or {}).get("actions") or []
        if not actions:
            raise RequestError(f"No create action returned for Droplet {droplet.id}")

        action_id = int(actions[0]["id"])
        log_debug(f"Droplet {droplet.id} created, waiting on action {action_id}")
        return droplet, action_id

    def wait_until_active(self, action_id: int) -> None:
        """Poll the create action until it completes, errors or times out"""
        deadline = self._clock() + self.wait_timeout
        failures = 0
        delay = self.poll_interval

        while True:
            try:
                response: dict[str, Any] = self.client.actions.get(action_id)
            except AzureError as e:
                failures += 1
                log_warning(f"Polling action {action_id} failed ({failures} in a row): {_describe(e)}")
                if failures > self.max_poll_failures:
                    raise ReadinessError(_describe(e)) from e
                delay *= 2
            else:
                failures = 0
                delay = self.poll_interval
                status = response["action"]["status"]
                log_debug(f"Action {action_id} status: {status}")
                if status == ACTION_COMPLETED:
                    log_status(f"Action {action_id} completed")
                    return
                if status == ACTION_ERRORED:
                    raise ReadinessError(f"Action {action_id} errored")
                if status != ACTION_IN_PROGRESS:
                    raise ReadinessError(f"Action {action_id} has unknown status: [{status}]")

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise ReadinessError(
                    f"Timed out after {self.wait_timeout:g}s waiting for action {action_id} to complete"
                )
            self._sleep(min(delay, remaining))

    def get(self, droplet_id: int) -> Droplet:
        try:
            response: dict[str, Any] = self.client.droplets.get(droplet_id)
        except AzureError as e:
            raise DropletLookupError(_describe(e)) from e
        return Droplet.from_dict(response["droplet"])
