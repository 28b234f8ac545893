"""
Engine error types.
"""


class MalformedInputError(ValueError):
    """Input rows the engine cannot interpret (bad referral edge, duplicate candidate)."""
