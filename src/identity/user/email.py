"""Email address normalization and structural checks."""


def normalize_email(address):
    return address.strip().lower() if isinstance(address, str) else address


def is_valid_email(address) -> bool:
    """Check that an address follows a basic valid structure.

    Exactly one @, non-empty local and domain parts, a dotted domain, no
    consecutive dots, no whitespace and none of the characters that would
    need quoting.
    """
    if not isinstance(address, str) or not address:
        return False

    if any(ch.isspace() for ch in address):
        return False

    if address.count("@") != 1:
        return False

    local_part, domain_part = address.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part or ".." in local_part or ".." in domain_part:
        return False

    # Domain labels may not begin or end with a hyphen
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False

    return not any(forbidden in address for forbidden in (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\"))
