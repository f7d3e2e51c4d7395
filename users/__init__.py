"""Users app: Firebase-backed identities and public profiles."""
