"""Success shaping for tool results.

A shaper turns the raw Evolution API payload into an agent-friendly dict
that echoes identifiers, counts and a one-line summary. Endpoints without a
dedicated shaper use ``default_shaper``.
"""

from typing import Any, Callable

Shaper = Callable[[dict[str, Any], Any], dict[str, Any]]


def _as_dict(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _message_id(data: Any) -> Any:
    key = _as_dict(data).get("key")
    return key.get("id") if isinstance(key, dict) else None


def _records(data: Any, key: str) -> list[Any]:
    """Extract a record list from either a bare list or a paginated envelope."""
    if isinstance(data, list):
        return data
    value = _as_dict(data).get(key)
    if isinstance(value, list):
        return value
    if isinstance(value, dict) and isinstance(value.get("records"), list):
        return value["records"]
    return []


def default_shaper(params: dict[str, Any], data: Any) -> dict[str, Any]:
    shaped: dict[str, Any] = {"result": data}
    if "instance" in params:
        shaped["instance"] = params["instance"]
    return shaped


def sent_message_shaper(label: str) -> Shaper:
    """Build a shaper for the ``send-*`` endpoints."""

    def shape(params: dict[str, Any], data: Any) -> dict[str, Any]:
        recipient = params.get("number")
        return {
            "message": f"{label} sent successfully to {recipient}",
            "message_id": _message_id(data),
            "instance": params.get("instance"),
            "recipient": recipient,
            "result": data,
        }

    return shape


def shape_reaction(params: dict[str, Any], data: Any) -> dict[str, Any]:
    key = _as_dict(params.get("key"))
    return {
        "message": f"Reaction {params.get('reaction')} sent successfully",
        "message_id": _message_id(data),
        "reacted_to": key.get("id"),
        "instance": params.get("instance"),
        "result": data,
    }


def found_records_shaper(noun: str, key: str) -> Shaper:
    """Build a shaper for the ``find-*`` endpoints."""

    def shape(params: dict[str, Any], data: Any) -> dict[str, Any]:
        records = _records(data, key)
        return {
            "message": f"Found {len(records)} {noun}",
            "count": len(records),
            "instance": params.get("instance"),
            "filters": params.get("where", {}),
            noun: records,
        }

    return shape


def shape_mark_as_read(params: dict[str, Any], data: Any) -> dict[str, Any]:
    keys = params.get("readMessages", [])
    return {
        "message": f"Marked {len(keys)} message(s) as read",
        "marked_count": len(keys),
        "message_ids": [k.get("id") for k in keys if isinstance(k, dict)],
        "instance": params.get("instance"),
        "result": data,
    }


def shape_archive_chat(params: dict[str, Any], data: Any) -> dict[str, Any]:
    action = "archived" if params.get("archive") else "unarchived"
    return {
        "message": f"Chat {params.get('chat')} {action} successfully",
        "chat": params.get("chat"),
        "action": action,
        "instance": params.get("instance"),
        "result": data,
    }


def shape_check_is_whatsapp(params: dict[str, Any], data: Any) -> dict[str, Any]:
    entries = data if isinstance(data, list) else []
    valid = sum(1 for entry in entries if isinstance(entry, dict) and entry.get("exists"))
    checked = len(params.get("numbers", []))
    return {
        "message": f"Checked {checked} number(s): {valid} registered on WhatsApp",
        "checked_count": checked,
        "valid_numbers": valid,
        "instance": params.get("instance"),
        "results": data,
    }


def shape_fetch_instances(params: dict[str, Any], data: Any) -> dict[str, Any]:
    items = data if isinstance(data, list) else []
    summary = []
    for item in items:
        item = _as_dict(item)
        nested = _as_dict(item.get("instance"))
        name = item.get("name") or nested.get("instanceName")
        status = item.get("connectionStatus") or nested.get("status")
        summary.append({"name": name, "status": status, "connected": status == "open"})
    return {
        "message": f"Found {len(summary)} instance(s)",
        "count": len(summary),
        "instances": summary,
        "result": data,
    }


def shape_create_instance(params: dict[str, Any], data: Any) -> dict[str, Any]:
    body = _as_dict(data)
    qr_code = body.get("qrcode")
    if qr_code:
        note = "Scan the QR code with WhatsApp to connect the instance"
    else:
        note = "Call the connect instance tool to get a QR code"
    return {
        "message": f"Instance {params.get('instanceName')} created successfully",
        "instance": body.get("instance", {"instanceName": params.get("instanceName")}),
        "qr_code": qr_code,
        "note": note,
        "result": data,
    }


def shape_connect_instance(params: dict[str, Any], data: Any) -> dict[str, Any]:
    body = _as_dict(data)
    return {
        "message": f"Connection started for instance {params.get('instance')}",
        "instance": params.get("instance"),
        "qr_code": body.get("base64") or body.get("code"),
        "pairing_code": body.get("pairingCode"),
        "result": data,
    }


def shape_delete_instance(params: dict[str, Any], data: Any) -> dict[str, Any]:
    return {
        "message": f"Instance {params.get('instance')} deleted successfully",
        "instance": params.get("instance"),
        "result": data,
    }


def shape_create_group(params: dict[str, Any], data: Any) -> dict[str, Any]:
    body = _as_dict(data)
    return {
        "message": f"Group '{params.get('subject')}' created successfully",
        "group_jid": body.get("groupJid") or body.get("id"),
        "subject": params.get("subject"),
        "participants_count": len(params.get("participants", [])),
        "instance": params.get("instance"),
        "result": data,
    }


DEFAULT_SHAPERS: dict[str, Shaper] = {
    "create-instance": shape_create_instance,
    "fetch-instances": shape_fetch_instances,
    "connect-instance": shape_connect_instance,
    "delete-instance": shape_delete_instance,
    "send-text": sent_message_shaper("Text message"),
    "send-media": sent_message_shaper("Media message"),
    "send-audio": sent_message_shaper("Audio message"),
    "send-sticker": sent_message_shaper("Sticker"),
    "send-location": sent_message_shaper("Location"),
    "send-contact": sent_message_shaper("Contact"),
    "send-poll": sent_message_shaper("Poll"),
    "send-list": sent_message_shaper("List message"),
    "send-button": sent_message_shaper("Button message"),
    "send-reaction": shape_reaction,
    "find-messages": found_records_shaper("messages", "messages"),
    "find-contacts": found_records_shaper("contacts", "contacts"),
    "find-chats": found_records_shaper("chats", "chats"),
    "mark-as-read": shape_mark_as_read,
    "archive-chat": shape_archive_chat,
    "check-is-whatsapp": shape_check_is_whatsapp,
    "create-group": shape_create_group,
}
