def safe_call(func, *args, **kwargs):
    """Safely call a function, ignoring exceptions."""
    try:
        return func(*args, **kwargs)
    except Exception:
        pass
    return None


def handle_search_key(app, event) -> bool:
    """Route a key typed while the find prompt is open.

    Returns True if the key was handled, False otherwise.
    """
    k = event.key
    ch = getattr(event, "character", "") or ""

    # Map keys to their corresponding actions
    actions = {
        "escape": "action_cancel_find",
        "enter": "action_submit_find",
        "return": "action_submit_find",
        "backspace": "action_find_backspace",
        "ctrl+h": "action_find_backspace",
        "\b": "action_find_backspace",
    }

    if k in actions:
        safe_call(getattr(app, actions[k]))
        safe_call(event.prevent_default)
        safe_call(event.stop)
        return True

    # Handle printable characters
    if (isinstance(ch, str) and len(ch) == 1 and ch.isprintable() and
        not any(getattr(event, mod, False) for mod in ["ctrl", "alt", "meta"])):
        safe_call(app.action_find_append_char, ch)
        safe_call(event.prevent_default)
        safe_call(event.stop)
        return True

    return False
