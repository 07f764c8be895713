"""Character budgets for prompt content."""


def truncate(text: str | None, budget: int) -> str:
    """Cut text to at most budget characters after trimming outer whitespace.

    A plain prefix cut: the same input always truncates at the same boundary.
    """
    if not text:
        return ""
    return text.strip()[:budget]
