from textual.binding import Binding


# Default key bindings for the viewer, modelled on an editor's normal mode.


def viewer_bindings() -> list[Binding]:
    return [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("slash", "start_find", "Find"),
        Binding("question_mark", "start_find_backward", "Find Back"),
        Binding("n", "find_next", "Next"),
        Binding("N", "find_prev", "Prev"),
        Binding("j,down", "cursor_down", "", show=False),
        Binding("k,up", "cursor_up", "", show=False),
        Binding("g,home", "cursor_top", "Top"),
        Binding("G,end", "cursor_bottom", "Bottom"),
        Binding("escape", "cancel_find", "", show=False),
    ]
