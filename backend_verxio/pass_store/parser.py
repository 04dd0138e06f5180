"""
Extract loyalty pass and program fields from DAS getAsset results.

Verxio passes are Metaplex Core assets. Their state lives in:
  - plugins.attributes.data.attribute_list: [{"key": ..., "value": ...}] (string values)
      pass:       xp, lastAction, currentTier
      collection: tiers (JSON), pointsPerAction (JSON), metadata (JSON), name
  - external_plugins[type == "AppData"].data: action history, either a JSON
    string or decoded JSON; a list of actions or {"actions": [...]}
  - grouping[group_key == "collection"].group_value: the owning program
  - mpl_core_info.num_minted (collection only)

Missing keys are handled; values that are present but unusable raise MalformedPassData.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from backend_verxio.pass_store.models import ActionRecord, PassState, ProgramMeta, RewardTier


class MalformedPassData(ValueError):
    """A pass or program payload has a present but unusable field."""


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _decode_json(value: Any, key: str) -> Any:
    """Attribute values are strings; decode JSON ones. Already-decoded values pass through."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedPassData(f"attribute {key!r} is not valid JSON") from e


def _to_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise MalformedPassData(f"{key!r} must be an integer")
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise MalformedPassData(f"{key!r} must be an integer, got {value!r}") from e


def attribute_map(asset: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten the attributes plugin into {key: value}; later duplicates win."""
    plugins = _as_dict(asset.get("plugins"))
    attributes = _as_dict(plugins.get("attributes"))
    data = _as_dict(attributes.get("data"))
    attribute_list = data.get("attribute_list") or data.get("attributeList") or []
    out: Dict[str, Any] = {}
    if not isinstance(attribute_list, list):
        return out
    for entry in attribute_list:
        if not isinstance(entry, dict):
            continue
        key = entry.get("key")
        if isinstance(key, str) and key:
            out[key] = entry.get("value")
    return out


def collection_of(asset: Dict[str, Any]) -> str | None:
    """Collection address from DAS grouping, if any."""
    grouping = asset.get("grouping") or []
    if not isinstance(grouping, list):
        return None
    for group in grouping:
        if isinstance(group, dict) and group.get("group_key") == "collection":
            value = group.get("group_value")
            return value if isinstance(value, str) and value else None
    return None


def _asset_name(asset: Dict[str, Any]) -> str:
    content = _as_dict(asset.get("content"))
    metadata = _as_dict(content.get("metadata"))
    name = metadata.get("name")
    return name.strip() if isinstance(name, str) else ""


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() in ("null", "none"):
        return None
    return text


def parse_reward_tiers(raw: Any) -> List[RewardTier]:
    """Tiers from a JSON string or list of {name, xpRequired, rewards}; order is kept."""
    decoded = _decode_json(raw, "tiers")
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise MalformedPassData("tiers must be a list")
    tiers: List[RewardTier] = []
    for entry in decoded:
        if not isinstance(entry, dict):
            raise MalformedPassData("tier entries must be objects")
        name = entry.get("name")
        if not isinstance(name, str):
            raise MalformedPassData("tier name must be a string")
        xp_required = _to_int(entry.get("xpRequired", entry.get("xp_required")), "xpRequired")
        rewards = entry.get("rewards") or []
        if not isinstance(rewards, list):
            rewards = [rewards]
        tiers.append(RewardTier(name=name, xp_required=xp_required, rewards=tuple(str(r) for r in rewards)))
    return tiers


def parse_action_history(asset: Dict[str, Any]) -> List[ActionRecord]:
    """Actions from the first AppData external plugin; empty when there is none."""
    external = asset.get("external_plugins") or []
    if not isinstance(external, list):
        return []
    for plugin in external:
        if not isinstance(plugin, dict):
            continue
        if str(plugin.get("type") or "").lower() != "appdata":
            continue
        data = _decode_json(plugin.get("data"), "actionHistory")
        if isinstance(data, dict):
            data = data.get("actions") or data.get("actionHistory") or []
        if data is None:
            return []
        if not isinstance(data, list):
            raise MalformedPassData("action history must be a list")
        actions: List[ActionRecord] = []
        for entry in data:
            if not isinstance(entry, dict):
                raise MalformedPassData("action entries must be objects")
            actions.append(
                ActionRecord(
                    type=str(entry.get("type") or entry.get("action") or ""),
                    points=_to_int(entry.get("points", 0), "points"),
                    timestamp=entry.get("timestamp"),
                )
            )
        return actions
    return []


def parse_pass_state(
    asset: Dict[str, Any],
    reward_tiers: List[RewardTier] | tuple[RewardTier, ...] = (),
) -> PassState | None:
    """
    Build a PassState from a getAsset result.

    Returns None when the asset carries no xp attribute (not a loyalty pass).
    """
    if not isinstance(asset, dict):
        raise MalformedPassData("asset payload must be an object")
    asset_id = asset.get("id")
    if not isinstance(asset_id, str) or not asset_id:
        raise MalformedPassData("asset payload has no id")
    attrs = attribute_map(asset)
    if "xp" not in attrs:
        return None
    xp = _to_int(attrs["xp"], "xp")
    if xp < 0:
        raise MalformedPassData(f"xp must be >= 0, got {xp}")
    ownership = _as_dict(asset.get("ownership"))
    owner = ownership.get("owner")
    return PassState(
        asset_id=asset_id,
        xp=xp,
        last_action=_optional_str(attrs.get("lastAction")),
        current_tier=_optional_str(attrs.get("currentTier")) or "",
        action_history=tuple(parse_action_history(asset)),
        reward_tiers=tuple(reward_tiers),
        name=_asset_name(asset),
        owner=owner if isinstance(owner, str) else None,
        collection=collection_of(asset),
    )


def parse_program_meta(asset: Dict[str, Any], collection_address: str) -> ProgramMeta:
    """Build ProgramMeta from a getAsset result for the program's collection."""
    if not isinstance(asset, dict):
        raise MalformedPassData("collection payload must be an object")
    attrs = attribute_map(asset)
    core_info = _as_dict(asset.get("mpl_core_info"))
    num_minted_raw = core_info.get("num_minted", attrs.get("numMinted", 0))
    points_raw = _decode_json(attrs.get("pointsPerAction"), "pointsPerAction") or {}
    if not isinstance(points_raw, dict):
        raise MalformedPassData("pointsPerAction must be an object")
    metadata = _decode_json(attrs.get("metadata"), "metadata") or {}
    if not isinstance(metadata, dict):
        raise MalformedPassData("metadata must be an object")
    return ProgramMeta(
        name=_asset_name(asset) or (_optional_str(attrs.get("name")) or ""),
        num_minted=_to_int(num_minted_raw if num_minted_raw is not None else 0, "num_minted"),
        collection_address=collection_address,
        tiers=tuple(parse_reward_tiers(attrs.get("tiers"))),
        points_per_action={str(k): _to_int(v, str(k)) for k, v in points_raw.items()},
        metadata=metadata,
    )
