"""
CRM integration.

Mirrors client intake records into an external CRM. Two providers are
supported: Go High Level contacts and Square customers. The provider is picked
from settings (CRM_PROVIDER). Every call returns a CRMResult; network and API
failures are logged and reported as ``success=False`` instead of raising.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import httpx

from src.core.settings import AppSettings, get_app_settings
from src.schemas.clients import CRMResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "No CRM provider configured"

GHL_BASE_URL = "https://rest.gohighlevel.com/v1"
SQUARE_PRODUCTION_URL = "https://connect.squareup.com/v2"
SQUARE_SANDBOX_URL = "https://connect.squareupsandbox.com/v2"
SQUARE_VERSION = "2023-10-18"


def split_name(name: str) -> Tuple[str, str]:
    """Split a full name into (first, last) on the first space."""
    name = (name or "").strip()
    first, _, last = name.partition(" ")
    return first or name, last.strip()


def _contact_fields(client: Any) -> Dict[str, Any]:
    if isinstance(client, dict):
        return client
    return {
        key: getattr(client, key, None)
        for key in (
            "name", "email", "phone", "address", "event_type", "budget",
            "theme", "colors", "inspiration", "birthdate", "can_text",
        )
    }


class CRMProvider(ABC):
    """Base class for CRM providers talking HTTP via httpx.AsyncClient."""

    display_name = "unknown"
    base_url = ""

    def __init__(self, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, headers=self._headers(), timeout=self.timeout, transport=self._transport
        )

    def _error_message(self, response: httpx.Response, fallback: str) -> str:
        return fallback

    async def _send(self, method: str, url: str, payload: Optional[dict], action: str) -> Tuple[bool, Any, str]:
        """Perform a request; returns (ok, decoded body, error message)."""
        try:
            async with self._client() as cli:
                response = await cli.request(method, url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("%s %s request failed: %s", self.display_name, action, exc)
            return False, None, f"{self.display_name} API error: {exc}"

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_success:
            return True, data, ""
        message = self._error_message(response, f"Failed to {action} in {self.display_name}")
        logger.warning("%s %s failed with HTTP %s: %s", self.display_name, action, response.status_code, message)
        return False, data, message

    @abstractmethod
    async def create_contact(self, client: Any) -> CRMResult:
        """Create a contact from a client record or intake dict."""

    @abstractmethod
    async def update_contact(self, contact_id: str, client: Any) -> CRMResult:
        """Push the client's changed contact fields."""

    @abstractmethod
    async def get_contact(self, contact_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a contact mapped back to intake field names, or None."""


class GoHighLevelProvider(CRMProvider):
    """Go High Level contacts API (v1)."""

    display_name = "Go High Level"
    base_url = GHL_BASE_URL

    def __init__(self, api_key: str, location_id: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.location_id = location_id

    def _headers(self) -> Dict[str, str]:
        return {**super()._headers(), "Authorization": f"Bearer {self.api_key}"}

    def _error_message(self, response: httpx.Response, fallback: str) -> str:
        try:
            return response.json().get("message") or fallback
        except (ValueError, AttributeError):
            return fallback

    def build_contact_payload(self, client: Any) -> Dict[str, Any]:
        fields = _contact_fields(client)
        first, last = split_name(fields.get("name") or "")
        return {
            "firstName": first,
            "lastName": last,
            "email": fields.get("email"),
            "phone": fields.get("phone"),
            "address1": fields.get("address"),
            "locationId": self.location_id,
            "customField": {
                "eventType": fields.get("event_type"),
                "budget": fields.get("budget"),
                "theme": fields.get("theme"),
                "colors": fields.get("colors"),
                "inspiration": fields.get("inspiration"),
                "birthdate": fields.get("birthdate"),
                "canText": "yes" if fields.get("can_text") else "no",
            },
        }

    async def create_contact(self, client: Any) -> CRMResult:
        ok, data, error = await self._send("POST", "/contacts", self.build_contact_payload(client), "create contact")
        if not ok:
            return CRMResult(success=False, message=error)
        data = data or {}
        contact_id = (data.get("contact") or {}).get("id") or data.get("id")
        return CRMResult(
            success=True,
            contact_id=str(contact_id) if contact_id else None,
            message="Contact created successfully in Go High Level",
        )

    async def update_contact(self, contact_id: str, client: Any) -> CRMResult:
        fields = _contact_fields(client)
        payload: Dict[str, Any] = {}
        if fields.get("name"):
            payload["firstName"], payload["lastName"] = split_name(fields["name"])
        if fields.get("email"):
            payload["email"] = fields["email"]
        if fields.get("phone"):
            payload["phone"] = fields["phone"]
        if fields.get("address"):
            payload["address1"] = fields["address"]

        ok, _, error = await self._send("PUT", f"/contacts/{contact_id}", payload, "update contact")
        if not ok:
            return CRMResult(success=False, contact_id=contact_id, message=error)
        return CRMResult(success=True, contact_id=contact_id, message="Contact updated successfully in Go High Level")

    async def get_contact(self, contact_id: str) -> Optional[Dict[str, Any]]:
        ok, data, _ = await self._send("GET", f"/contacts/{contact_id}", None, "fetch contact")
        if not ok or not data:
            return None
        contact = data.get("contact") or data
        custom = contact.get("customField") or {}
        return {
            "name": f"{contact.get('firstName') or ''} {contact.get('lastName') or ''}".strip(),
            "email": contact.get("email"),
            "phone": contact.get("phone"),
            "address": contact.get("address1"),
            "event_type": custom.get("eventType"),
            "budget": custom.get("budget"),
            "theme": custom.get("theme"),
            "colors": custom.get("colors"),
            "inspiration": custom.get("inspiration"),
            "birthdate": custom.get("birthdate"),
            "can_text": custom.get("canText") == "yes",
        }


class SquareProvider(CRMProvider):
    """Square Customers API. Intake details travel as JSON in the customer note."""

    display_name = "Square"

    def __init__(self, access_token: str, environment: str = "sandbox", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.access_token = access_token
        self.environment = (environment or "sandbox").lower()
        self.base_url = SQUARE_PRODUCTION_URL if self.environment == "production" else SQUARE_SANDBOX_URL

    def _headers(self) -> Dict[str, str]:
        return {
            **super()._headers(),
            "Authorization": f"Bearer {self.access_token}",
            "Square-Version": SQUARE_VERSION,
        }

    def _error_message(self, response: httpx.Response, fallback: str) -> str:
        try:
            errors = response.json().get("errors") or []
        except (ValueError, AttributeError):
            return fallback
        return (errors[0].get("detail") if errors else None) or fallback

    def build_customer_payload(self, client: Any) -> Dict[str, Any]:
        fields = _contact_fields(client)
        first, last = split_name(fields.get("name") or "")
        payload: Dict[str, Any] = {
            "given_name": first,
            "family_name": last,
            "email_address": fields.get("email"),
            "phone_number": fields.get("phone"),
            "note": json.dumps(
                {
                    "eventType": fields.get("event_type"),
                    "budget": fields.get("budget"),
                    "theme": fields.get("theme"),
                    "colors": fields.get("colors"),
                    "inspiration": fields.get("inspiration"),
                    "birthdate": fields.get("birthdate"),
                    "canText": bool(fields.get("can_text")),
                }
            ),
        }
        if fields.get("address"):
            payload["address"] = {"address_line_1": fields["address"]}
        return payload

    async def create_contact(self, client: Any) -> CRMResult:
        ok, data, error = await self._send("POST", "/customers", self.build_customer_payload(client), "create contact")
        if not ok:
            return CRMResult(success=False, message=error)
        contact_id = ((data or {}).get("customer") or {}).get("id")
        return CRMResult(success=True, contact_id=contact_id, message="Contact created successfully in Square")

    async def update_contact(self, contact_id: str, client: Any) -> CRMResult:
        fields = _contact_fields(client)
        payload: Dict[str, Any] = {}
        if fields.get("name"):
            payload["given_name"], payload["family_name"] = split_name(fields["name"])
        if fields.get("email"):
            payload["email_address"] = fields["email"]
        if fields.get("phone"):
            payload["phone_number"] = fields["phone"]

        ok, _, error = await self._send("PUT", f"/customers/{contact_id}", payload, "update contact")
        if not ok:
            return CRMResult(success=False, contact_id=contact_id, message=error)
        return CRMResult(success=True, contact_id=contact_id, message="Contact updated successfully in Square")

    async def get_contact(self, contact_id: str) -> Optional[Dict[str, Any]]:
        ok, data, _ = await self._send("GET", f"/customers/{contact_id}", None, "fetch contact")
        if not ok or not data:
            return None
        customer = data.get("customer") or {}
        try:
            extra = json.loads(customer["note"]) if customer.get("note") else {}
        except ValueError:
            logger.info("Square customer %s has a non-JSON note", contact_id)
            extra = {}
        return {
            "name": f"{customer.get('given_name') or ''} {customer.get('family_name') or ''}".strip(),
            "email": customer.get("email_address"),
            "phone": customer.get("phone_number"),
            "address": (customer.get("address") or {}).get("address_line_1"),
            "event_type": extra.get("eventType"),
            "budget": extra.get("budget"),
            "theme": extra.get("theme"),
            "colors": extra.get("colors"),
            "inspiration": extra.get("inspiration"),
            "birthdate": extra.get("birthdate"),
            "can_text": bool(extra.get("canText")),
        }


# PUBLIC_INTERFACE
def build_provider(
    settings: AppSettings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[CRMProvider]:
    """Instantiate the configured provider, or None when CRM sync is disabled or incomplete."""
    name = settings.CRM_PROVIDER
    if name == "gohighlevel":
        if settings.GHL_API_KEY and settings.GHL_LOCATION_ID:
            return GoHighLevelProvider(
                api_key=settings.GHL_API_KEY,
                location_id=settings.GHL_LOCATION_ID,
                timeout=settings.CRM_TIMEOUT_SECONDS,
                transport=transport,
            )
        logger.warning("CRM_PROVIDER=gohighlevel but GHL_API_KEY/GHL_LOCATION_ID are missing")
    elif name == "square":
        if settings.SQUARE_ACCESS_TOKEN:
            return SquareProvider(
                access_token=settings.SQUARE_ACCESS_TOKEN,
                environment=settings.SQUARE_ENVIRONMENT,
                timeout=settings.CRM_TIMEOUT_SECONDS,
                transport=transport,
            )
        logger.warning("CRM_PROVIDER=square but SQUARE_ACCESS_TOKEN is missing")
    elif name:
        logger.warning("Unsupported CRM provider %r", name)
    return None


class CRMService:
    """Facade over the configured provider."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        provider: Optional[CRMProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.provider = provider or build_provider(settings or get_app_settings(), transport=transport)

    @property
    def is_configured(self) -> bool:
        return self.provider is not None

    @property
    def provider_name(self) -> str:
        return self.provider.display_name if self.provider else "none"

    async def create_contact(self, client: Any) -> CRMResult:
        if not self.provider:
            return CRMResult(success=False, message=NOT_CONFIGURED)
        return await self.provider.create_contact(client)

    async def update_contact(self, contact_id: str, client: Any) -> CRMResult:
        if not self.provider:
            return CRMResult(success=False, message=NOT_CONFIGURED)
        return await self.provider.update_contact(contact_id, client)

    async def get_contact(self, contact_id: str) -> Optional[Dict[str, Any]]:
        if not self.provider:
            return None
        return await self.provider.get_contact(contact_id)

    async def sync_client(self, client: Any) -> CRMResult:
        """Create the contact, or update it when the client already carries a CRM id."""
        crm_id = getattr(client, "crm_id", None)
        if crm_id:
            return await self.update_contact(crm_id, client)
        return await self.create_contact(client)


# PUBLIC_INTERFACE
def get_crm_service() -> CRMService:
    """FastAPI dependency returning a CRMService for the current settings."""
    return CRMService()
