"""Single-shot Droplet submission: create, wait until active and summarize"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from droplet_form.config import Settings
from droplet_form.console import log_error, log_status
from droplet_form.digitalocean_client import DigitalOceanClient
from droplet_form.errors import ConfigurationError, SubmissionError
from droplet_form.form import CreationRequest

SUCCESS_HEADLINE = "Success!"
FAILURE_HEADLINE = "Something went wrong:"


@dataclass(frozen=True)
class DropletSummary:
    name: str
    price_monthly: float
    region: str
    size: str
    public_ipv4: str
    private_ipv4: str

    def rows(self) -> list[tuple[str, str]]:
        return [
            ("Name:", self.name),
            ("Price Monthly:", f"${self.price_monthly:.2f}"),
            ("Region:", self.region),
            ("Size:", self.size),
            ("Public IPv4:", self.public_ipv4),
            ("Private IPv4:", self.private_ipv4),
        ]


@dataclass(frozen=True)
class SubmissionOutcome:
    """The one completion event a submission produces"""

    succeeded: bool
    message: str
    summary: DropletSummary | None = None
    error: str | None = None


def format_summary(summary: DropletSummary) -> str:
    lines = [SUCCESS_HEADLINE, ""]
    lines.extend(f"{label} {value}" for label, value in summary.rows())
    return "\n".join(lines)


def format_error(description: str) -> str:
    return f"{FAILURE_HEADLINE}\n\n{description}"


def default_client_factory(settings: Settings) -> Callable[[str], Any]:
    def factory(token: str) -> DigitalOceanClient:
        return DigitalOceanClient(
            token,
            wait_timeout=settings.wait_timeout,
            poll_interval=settings.poll_interval,
            max_poll_failures=settings.max_poll_failures,
        )

    return factory


class SubmissionTask:
    """Runs the create sequence once and turns every failure into a message"""

    def __init__(
        self,
        settings: Settings | None = None,
        client_factory: Callable[[str], Any] | None = None,
    ) -> None:
        self.settings: Settings = settings or Settings()
        self.client_factory: Callable[[str], Any] = client_factory or default_client_factory(self.settings)

    def run(self, request: CreationRequest) -> SubmissionOutcome:
        try:
            summary = self._provision(request)
        except SubmissionError as e:
            log_error(f"{e.__class__.__name__}: {e}")
            return SubmissionOutcome(False, format_error(str(e)), error=str(e))
        except Exception as e:
            # Unexpected provider payloads must still end the submission with a message.
            description = f"{e.__class__.__name__}: {e}"
            log_error(description)
            return SubmissionOutcome(False, format_error(description), error=description)

        log_status(f"Droplet {summary.name} is active at {summary.public_ipv4}")
        return SubmissionOutcome(True, format_summary(summary), summary=summary)

    def _provision(self, request: CreationRequest) -> DropletSummary:
        token = self.settings.read_token()
        if not token:
            raise ConfigurationError(
                f"set the '{self.settings.token_env}' environment variable to a DigitalOcean API token"
            )

        client = self.client_factory(token)
        droplet, action_id = client.create(request)
        client.wait_until_active(action_id)
        droplet = client.get(droplet.id)

        return DropletSummary(
            name=droplet.name,
            price_monthly=droplet.price_monthly,
            region=droplet.region_name,
            size=droplet.size_slug,
            public_ipv4=droplet.public_ipv4(),
            private_ipv4=droplet.private_ipv4(),
        )
