def normalize_name(name: str) -> str:
    """Normalize Pokemon object names to a lookup id.

    Converts names to lowercase and removes all non-alphanumeric characters.
    This handles species, moves, abilities, items, and natures consistently,
    so rule tables can be keyed by id rather than display name.

    Args:
        name: The name to normalize (e.g., "Farfetch'd", "Never-Melt Ice")

    Returns:
        Normalized name with only lowercase alphanumeric characters

    Examples:
        >>> normalize_name("Farfetch'd")
        'farfetchd'
        >>> normalize_name("Never-Melt Ice")
        'nevermeltice'
        >>> normalize_name("Landorus-Therian")
        'landorustherian'
    """
    return "".join(c for c in name.lower() if c.isalnum())
