"""
Chirps Domain - Short posts and new-chirp notifications

This domain handles:
- Chirp create / list / edit / delete
- Ownership checks on edit and delete
- Fan-out of NewChirp notifications to every other user
"""
