"""HeartsHeal guided-breathing service."""
