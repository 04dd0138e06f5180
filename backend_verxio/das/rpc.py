"""
Minimal JSON-RPC 2.0 plumbing for DAS methods (getAssetsByGroup, getAsset).
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

_request_ids = itertools.count(1)


class DasRpcError(RuntimeError):
    """RPC answered with an error object or without a result key."""


def build_rpc_body(method: str, params: dict[str, Any]) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": next(_request_ids),
        "method": method,
        "params": params,
    }


async def das_call(
    client: httpx.AsyncClient,
    rpc_url: str,
    method: str,
    params: dict[str, Any],
) -> Any:
    """
    Perform one DAS JSON-RPC call and return ``result`` (may be None).

    Raises httpx.HTTPError on transport/status failure, ValueError on invalid
    JSON and DasRpcError on an RPC-level error.
    """
    body = build_rpc_body(method, params)
    resp = await client.post(rpc_url, json=body)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise DasRpcError(f"DAS {method} returned a non-object payload")
    if "error" in data:
        err = data["error"]
        if isinstance(err, dict):
            raise DasRpcError(f"DAS {method} error: {err.get('message', err)} (code={err.get('code')})")
        raise DasRpcError(f"DAS {method} error: {err}")
    if "result" not in data:
        raise DasRpcError(f"DAS {method} returned no result")
    return data["result"]
