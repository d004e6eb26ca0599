"""
BMP Blend - File Dialogs

Cross-platform file dialogs for projects and rule/blend files, using plyer
with a tkinter fallback.
"""

from plyer import filechooser

PROJECT_FILETYPES = [("Project files", "*.json"), ("All files", "*.*")]
TEXT_FILETYPES = [("Text files", "*.txt"), ("All files", "*.*")]


def _tkinter_dialog(save: bool, title: str, default_extension: str, filetypes) -> str | None:
    """Tkinter fallback for when no plyer backend is available."""
    try:
        import tkinter as tk
        from tkinter import filedialog
    except ImportError:
        print("tkinter not available for file dialog")
        return None

    root = tk.Tk()
    root.withdraw()
    if save:
        path = filedialog.asksaveasfilename(
            title=title, defaultextension=default_extension, filetypes=filetypes
        )
    else:
        path = filedialog.askopenfilename(title=title, filetypes=filetypes)
    root.destroy()
    return path or None


def open_file_dialog(title: str, filetypes: list[tuple[str, str]]) -> str | None:
    """
    Display an 'Open File' dialog and return the selected path.

    Args:
        title: Dialog window title
        filetypes: List of (description, pattern) tuples, e.g. PROJECT_FILETYPES

    Returns:
        Selected file path, or None if canceled
    """
    try:
        result = filechooser.open_file(title=title, filters=filetypes)
    except (OSError, NotImplementedError):
        return _tkinter_dialog(False, title, "", filetypes)
    return result[0] if result else None


def save_file_dialog(
    title: str, default_extension: str, filetypes: list[tuple[str, str]]
) -> str | None:
    """
    Display a 'Save File' dialog and return the selected path.

    The default extension is appended when the chosen name lacks it.
    """
    try:
        result = filechooser.save_file(title=title, filters=filetypes)
    except (OSError, NotImplementedError):
        return _tkinter_dialog(True, title, default_extension, filetypes)
    if not result:
        return None
    path = result[0]
    if default_extension and not path.endswith(default_extension):
        path += default_extension
    return path
