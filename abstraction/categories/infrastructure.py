"""Infrastructure category: ngrok tunnels."""

from typing import Any, Dict

from abstraction.models import (
    CategoryConfig,
    ClientOperation,
    DispatchContext,
    FieldRule,
    VendorEntry,
    VendorMapping,
)


def ngrok_start_tunnel(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {
        "addr": client_input["port"],
        "subdomain": client_input.get("subdomain"),
        "region": client_input.get("region"),
    }


def ngrok_list_tunnels(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {}


def infrastructure_config() -> CategoryConfig:
    return CategoryConfig(
        client={
            "createTunnel": ClientOperation(schema={
                "port": FieldRule(type="number", required=True),
                "subdomain": FieldRule(type="string"),
                "region": FieldRule(type="string", default="us"),
            }),
            "listTunnels": ClientOperation(schema={}),
        },
        vendors={
            "ngrok": VendorEntry(
                adapter="ngrok-api",
                mappings={
                    "createTunnel": VendorMapping(tool="tunnels-start-tunnel", transform=ngrok_start_tunnel),
                    "listTunnels": VendorMapping(tool="tunnels-list-tunnels", transform=ngrok_list_tunnels),
                },
            ),
        },
    )
