"""String-level KSUID generation."""

from ksuid.config import get_config
from ksuid.core.identifier import Variant


def generate_ksuid(variant=None):
    """Generate a 27-character sortable unique ID.

    variant may be a Variant or its name; defaults to the configured variant.
    """
    if variant is None:
        variant = get_config().generator.variant
    return Variant.from_name(variant).cls.new().to_base62()
