from .webhook import WebhookClient, build_note_created_payload

__all__ = ["WebhookClient", "build_note_created_payload"]
