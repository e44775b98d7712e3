"""HTTP clients used by authentication providers."""

from recipe_api.auth.client.firebase_keys import FirebaseKeyClient


__all__ = ["FirebaseKeyClient"]
