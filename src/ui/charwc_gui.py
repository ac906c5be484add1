"""
DearPyGui UI for charwc
Allows user to select a file, pick an encoding and BOM policy, and show its counts.
"""
from pathlib import Path

import dearpygui.dearpygui as dpg

from common.models import Encoding
from ui.workflow_backend import count_file


def format_report(report):
    lines = [f"File: {report.file_path}"]
    if report.byte_count is not None:
        lines.append(f"bytes: {report.byte_count}")
    if report.char_count is not None:
        lines.append(f"chars: {report.char_count}")
    if report.error is not None:
        lines.append(f"Error: {report.error}")
    return "\n".join(lines)


def run_count(file_path, encoding, keep_bom, chunk_size, result_window):
    if not file_path:
        dpg.set_value(result_window, "Select a file first.\n")
        return
    dpg.set_value(result_window, "Counting...\n")
    report = count_file(
        Path(file_path),
        encoding=encoding,
        keep_bom=keep_bom,
        chunk_size=chunk_size,
    )
    dpg.set_value(result_window, format_report(report) + "\n")
    if not report.ok:
        with dpg.window(label="Error", modal=True, no_close=False, width=400, height=120):
            dpg.add_text(f"Counting failed:\n{report.error}")
            dpg.add_button(label="Close", callback=lambda: dpg.delete_item(dpg.last_item()))


def main():
    dpg.create_context()
    dpg.create_viewport(title='charwc', width=560, height=340)

    TEXT = {
        "file": "Select a file to count:",
        "encoding": "Select encoding:",
        "keep_bom": "Count a leading BOM as a character",
        "chunk_size": "Set chunk size (bytes):",
        "run": "Count:"
    }

    with dpg.window(label="charwc", width=540, height=320):
        dpg.add_text(TEXT["file"])
        file_path = dpg.add_input_text(label="File", width=400, hint="Path of the file to count.")
        with dpg.file_dialog(show=False, width=500, height=300,
                             callback=lambda sender, app_data: dpg.set_value(file_path, app_data["file_path_name"])) as dialog:
            dpg.add_file_extension(".*")
        dpg.add_button(label="Browse", callback=lambda: dpg.show_item(dialog))

        dpg.add_text(TEXT["encoding"])
        encoding = dpg.add_combo(items=[member.value for member in Encoding], default_value=Encoding.UTF8.value, width=200)
        keep_bom = dpg.add_checkbox(label=TEXT["keep_bom"], default_value=False)

        dpg.add_text(TEXT["chunk_size"])
        chunk_size = dpg.add_slider_int(label="Chunk Size (bytes)", default_value=4096, min_value=16, max_value=1048576, width=200)

        dpg.add_separator()
        dpg.add_text(TEXT["run"])
        result_window = dpg.add_input_text(label="Result", multiline=True, readonly=True, width=400, height=90, default_value="")
        dpg.add_button(label="Count", callback=lambda: run_count(
            dpg.get_value(file_path),
            dpg.get_value(encoding),
            dpg.get_value(keep_bom),
            dpg.get_value(chunk_size),
            result_window
        ))

    dpg.setup_dearpygui()
    dpg.show_viewport()
    dpg.start_dearpygui()
    dpg.destroy_context()

if __name__ == "__main__":
    main()
