def viewer_tips(search_hint: str = "", find_active: bool = False) -> str:
    """Format the tips line for the file viewer."""
    if find_active:
        base = "Tips: Enter=search, Esc=cancel"
    else:
        base = "Tips: /=find, ?=find back, n/N=next/prev, j/k=move, g/G=top/bottom, Ctrl+Q=quit"
    return base + (f" | {search_hint}" if search_hint else "")


def prompt_hint(text: str, backward: bool) -> str:
    return ("?" if backward else "/") + text + "_"
