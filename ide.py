"""
BOOSE IDE: desktop drawing environment
CustomTkinter + Tkinter hybrid GUI with dark Catppuccin theme,
syntax highlighting, line numbers, a drawing canvas and a
single-command entry. Each window owns its own interpreter.
"""
import tkinter as tk
from tkinter import filedialog, messagebox, font as tkfont
import customtkinter as ctk
import os
import re

from commands import CommandError
from drawing import DrawingSurface, PALETTE
from file_handler import read_program, write_program, is_program_file, ProgramFileError, FILE_TYPES
from interpreter import Interpreter, InterpreterError, InteractiveSession
from lexer import LexerError
from ide_theme import (
    COLORS, CANVAS_WIDTH, CANVAS_HEIGHT, CANVAS_BG, PEN_MARKER_RADIUS, TEXT_FONT_FAMILY,
    KEYWORDS_CONTROL, KEYWORDS_DRAW, KEYWORDS_PEN, PALETTE_WORDS,
)

# ── CustomTkinter global setup ──
ctk.set_appearance_mode("dark")


# ═══════════════════════════════════════════════════════
#  Drawing canvas adapter
# ═══════════════════════════════════════════════════════

class CanvasSurface(DrawingSurface):
    """Renders drawing primitives on a Tk canvas; colours are palette names."""

    def __init__(self, canvas: tk.Canvas):
        self.canvas = canvas
        self._marker = None

    @staticmethod
    def _hex(color):
        return PALETTE.get(color, PALETTE["BLACK"])

    def move_to(self, x, y):
        # Pen position marker, redrawn on every move
        if self._marker is not None:
            self.canvas.delete(self._marker)
        r = PEN_MARKER_RADIUS
        self._marker = self.canvas.create_oval(x - r, y - r, x + r, y + r,
                                               outline=COLORS["red"])

    def line_to(self, x1, y1, x2, y2, color):
        self.canvas.create_line(x1, y1, x2, y2, fill=self._hex(color))

    def fill_or_stroke_ellipse(self, x, y, width, height, color, filled):
        hex_color = self._hex(color)
        self.canvas.create_oval(x, y, x + width, y + height, outline=hex_color,
                                fill=hex_color if filled else "")

    def fill_or_stroke_rectangle(self, x, y, width, height, color, filled):
        hex_color = self._hex(color)
        self.canvas.create_rectangle(x, y, x + width, y + height, outline=hex_color,
                                     fill=hex_color if filled else "")

    def fill_or_stroke_polygon(self, points, color, filled):
        hex_color = self._hex(color)
        coords = [value for point in points for value in point]
        self.canvas.create_polygon(*coords, outline=hex_color,
                                   fill=hex_color if filled else "")

    def draw_text(self, text, x, y, size, color):
        self.canvas.create_text(x, y, text=text, anchor="nw", fill=self._hex(color),
                                font=(TEXT_FONT_FAMILY, size))

    def clear(self):
        self.canvas.delete("all")
        self._marker = None


# ═══════════════════════════════════════════════════════
#  Core Editor Widgets  (pure Tk, needed for tag-based
#  syntax highlighting and Canvas line numbers)
# ═══════════════════════════════════════════════════════

class LineNumbers(tk.Canvas):
    """Line-number gutter drawn on a Canvas."""

    def __init__(self, parent, text_widget, **kwargs):
        super().__init__(parent, **kwargs)
        self.text_widget = text_widget
        self.font = None

    def redraw(self, *_args):
        self.delete("all")
        if self.text_widget is None:
            return
        i = self.text_widget.index("@0,0")
        while True:
            dline = self.text_widget.dlineinfo(i)
            if dline is None:
                break
            linenum = str(i).split(".")[0]
            self.create_text(
                self.winfo_width() - 8, dline[1], anchor="ne", text=linenum,
                font=self.font, fill=COLORS["line_num_fg"],
            )
            i = self.text_widget.index(f"{i}+1line")
            if self.text_widget.compare(i, ">=", "end"):
                break


class CodeEditor(tk.Text):
    """Program editor with keyword highlighting and an error-line marker."""

    TAG_CONFIG = {
        "keyword_ctrl": {"foreground": COLORS["mauve"]},
        "keyword_draw": {"foreground": COLORS["blue"]},
        "keyword_pen":  {"foreground": COLORS["peach"]},
        "palette":      {"foreground": COLORS["yellow"]},
        "string":       {"foreground": COLORS["green"]},
        "number":       {"foreground": COLORS["peach"]},
        "operator":     {"foreground": COLORS["sky"]},
        "error_line":   {"background": "#3d2030"},
    }

    _REGEX_PATTERNS = [
        ("string",   r'"[^"\n]*"'),
        ("number",   r'\b\d+\b'),
        ("operator", r'==|!=|<=|>=|[<>=+\-*/]'),
    ]

    _WORD_GROUPS = [
        ("keyword_ctrl", KEYWORDS_CONTROL),
        ("keyword_draw", KEYWORDS_DRAW),
        ("keyword_pen",  KEYWORDS_PEN),
        ("palette",      PALETTE_WORDS),
    ]

    def __init__(self, parent, **kwargs):
        super().__init__(parent, **kwargs)
        for tag, cfg in self.TAG_CONFIG.items():
            self.tag_configure(tag, **cfg)
        self.tag_raise("error_line")
        self.bind("<<Modified>>", self._on_modify)
        self._highlight_job = None

    def _on_modify(self, _event=None):
        if self.edit_modified():
            if self._highlight_job:
                self.after_cancel(self._highlight_job)
            self._highlight_job = self.after(80, self.highlight_syntax)
            self.edit_modified(False)
            self.event_generate("<<ContentChanged>>")

    def highlight_syntax(self):
        for tag in self.TAG_CONFIG:
            if tag != "error_line":
                self.tag_remove(tag, "1.0", "end")
        code = self.get("1.0", "end-1c")
        for tag, pat in self._REGEX_PATTERNS:
            for m in re.finditer(pat, code):
                self.tag_add(tag, f"1.0+{m.start()}c", f"1.0+{m.end()}c")
        for tag, words in self._WORD_GROUPS:
            pattern = rf"\b({'|'.join(re.escape(w) for w in words)})\b"
            for m in re.finditer(pattern, code):
                pos = f"1.0+{m.start()}c"
                if "string" not in self.tag_names(pos):
                    self.tag_add(tag, pos, f"1.0+{m.end()}c")

    def mark_error_line(self, line_num):
        self.tag_remove("error_line", "1.0", "end")
        if line_num and line_num > 0:
            self.tag_add("error_line", f"{line_num}.0", f"{line_num}.end+1c")
            self.see(f"{line_num}.0")

    def source(self) -> str:
        return self.get("1.0", "end-1c")


class OutputPanel(tk.Text):
    """Read-only message log under the editor."""

    def __init__(self, parent, **kwargs):
        super().__init__(parent, **kwargs)
        self.configure(state="disabled")
        self.tag_configure("error",   foreground=COLORS["error"])
        self.tag_configure("success", foreground=COLORS["success"])
        self.tag_configure("info",    foreground=COLORS["subtext"])

    def append(self, text, tag="info"):
        self.configure(state="normal")
        self.insert("end", text, tag)
        self.see("end")
        self.configure(state="disabled")

    def clear(self):
        self.configure(state="normal")
        self.delete("1.0", "end")
        self.configure(state="disabled")


# ═══════════════════════════════════════════════════════
#  Helper Managers
# ═══════════════════════════════════════════════════════

class IDEFileManager:
    """Load / save of the editor's program."""
    def __init__(self, ide):
        self.ide = ide
        self.current_file = None

    def load_file(self):
        path = filedialog.askopenfilename(title="Load BOOSE Program", filetypes=FILE_TYPES)
        if not path:
            return
        try:
            content = read_program(path)
        except ProgramFileError as e:
            self.ide._show_error("File Error", str(e))
            return
        self.ide.editor.delete("1.0", "end")
        self.ide.editor.insert("1.0", content)
        self.current_file = path
        self.ide._update_title()
        self.ide._set_status(f"Loaded {os.path.basename(path)}")
        if not is_program_file(path):
            self.ide.output.append(
                f"{os.path.basename(path)} is not a .boose or .txt file; loaded as plain text.\n",
                "info")
        self.ide.editor.highlight_syntax()

    def save_file(self):
        path = self.current_file or filedialog.asksaveasfilename(
            title="Save BOOSE Program", defaultextension=".boose", filetypes=FILE_TYPES,
        )
        if not path:
            return
        try:
            write_program(path, self.ide.editor.source())
        except ProgramFileError as e:
            self.ide._show_error("File Error", str(e))
            return
        self.current_file = path
        self.ide._update_title()
        self.ide._set_status(f"Saved {os.path.basename(path)}", COLORS["success"])


class IDEExecutionEngine:
    """Runs the editor's program and the single-command entry."""
    def __init__(self, ide):
        self.ide = ide
        self.interpreter = Interpreter(ide.surface)
        self.session = InteractiveSession(self.interpreter)

    def syntax_check(self) -> bool:
        source = self.ide.editor.source()
        self.ide.editor.tag_remove("error_line", "1.0", "end")
        diagnostic = self.interpreter.validate(source)
        if diagnostic is not None:
            self.ide._show_error("Syntax Error", str(diagnostic), diagnostic.line_number)
            return False
        self.ide.output.append("Syntax check passed.\n", "success")
        self.ide._set_status("Syntax OK", COLORS["success"])
        return True

    def run_code(self):
        source = self.ide.editor.source()
        if not source.strip() or not self.syntax_check():
            return
        try:
            self.interpreter.run(source)
        except InterpreterError as e:
            self.ide._show_error("Runtime Error", str(e), e.line_number)
        else:
            self.ide.output.append("Program finished.\n", "success")
            self.ide._set_status("Finished", COLORS["success"])
        finally:
            # Line history no longer matches the interpreter's state
            self.session.clear()
            self.ide._refresh_pen_status()

    def execute_command(self, line):
        if not line.strip():
            return
        if line.strip() == "RUN":
            self.run_code()
            return
        try:
            self.session.feed(line)
        except (CommandError, LexerError) as e:
            self.ide._show_error("Command Error", str(e))
        else:
            self.ide.output.append(f"> {line}\n", "info")
        self.ide._refresh_pen_status()


# ═══════════════════════════════════════════════════════
#  Main window
# ═══════════════════════════════════════════════════════

class BooseIDE:
    """One IDE window: editor, command entry, canvas and status bar."""

    def __init__(self, master=None):
        # The first window owns the Tk main loop; later ones are Toplevels
        self.root = ctk.CTk() if master is None else ctk.CTkToplevel(master)
        self.root.title("BOOSE IDE")
        self.root.configure(fg_color=COLORS["bg_tertiary"])
        self.root.geometry("1280x760")
        self.root.minsize(900, 520)

        self.file_manager = IDEFileManager(self)
        self._build_ui()
        self.surface = CanvasSurface(self.canvas)
        self.execution_engine = IDEExecutionEngine(self)
        self._bind_shortcuts()
        self._refresh_pen_status()

    # ═══════ UI Construction ═══════

    def _build_ui(self):
        ctk.CTkFrame(self.root, fg_color=COLORS["accent"],
                     corner_radius=0, height=2).pack(fill="x", side="top")
        self._build_toolbar()
        self._build_statusbar()

        self.paned = tk.PanedWindow(
            self.root, orient="horizontal",
            bg=COLORS["border"], sashwidth=4, sashrelief="flat",
        )
        self.paned.pack(fill="both", expand=True)
        self._build_editor()
        self._build_canvas()

    def _button(self, parent, text, command, color=None, width=90):
        return ctk.CTkButton(
            parent, text=text, command=command,
            fg_color=color or COLORS["button_bg"],
            text_color=COLORS["bg_tertiary"] if color else COLORS["text"],
            hover_color=COLORS["button_hover"], corner_radius=8,
            font=("Segoe UI", 11, "bold" if color else "normal"), width=width, height=32,
        )

    def _build_toolbar(self):
        toolbar = ctk.CTkFrame(self.root, fg_color=COLORS["toolbar_bg"],
                               corner_radius=0, height=48)
        toolbar.pack(fill="x", side="top")
        toolbar.pack_propagate(False)

        for text, cmd, color in [
            ("▶  Run", self.run_code, COLORS["green"]),
            ("✓  Syntax Check", self.syntax_check, COLORS["yellow"]),
            ("Load", self.load_file, None),
            ("Save", self.save_file, None),
            ("New Window", self.new_window, None),
            ("Reset", self.reset_canvas, None),
        ]:
            width = 130 if "Syntax" in text or "Window" in text else 80
            self._button(toolbar, text, cmd, color, width).pack(side="left", padx=4, pady=8)

        ctk.CTkLabel(
            toolbar, text="BOOSE",
            font=("Segoe UI", 12, "bold"), text_color=COLORS["accent"],
        ).pack(side="right", padx=16)

    def _build_editor(self):
        editor_frame = tk.Frame(self.root, bg=COLORS["bg"])
        self.paned.add(editor_frame, stretch="always", width=560)

        container = tk.Frame(editor_frame, bg=COLORS["bg"])
        container.pack(fill="both", expand=True)

        self.code_font = tkfont.Font(family="Consolas", size=12)
        if "Consolas" not in tkfont.families():
            for fam in ("JetBrains Mono", "Fira Code", "Courier New", "monospace"):
                if fam in tkfont.families():
                    self.code_font = tkfont.Font(family=fam, size=12)
                    break

        self.line_numbers = LineNumbers(
            container, None, width=44,
            bg=COLORS["gutter"], highlightthickness=0, bd=0,
        )
        self.line_numbers.pack(side="left", fill="y")

        scrollbar = ctk.CTkScrollbar(
            container, orientation="vertical", fg_color=COLORS["bg"],
            button_color=COLORS["surface"], button_hover_color=COLORS["overlay"],
        )
        scrollbar.pack(side="right", fill="y")

        self.editor = CodeEditor(
            container, font=self.code_font,
            bg=COLORS["bg"], fg=COLORS["text"],
            insertbackground=COLORS["cursor"], insertwidth=2,
            selectbackground=COLORS["selection"], selectforeground=COLORS["text"],
            relief="flat", bd=0, padx=8, pady=8, wrap="none", undo=True,
            yscrollcommand=scrollbar.set,
        )
        self.editor.pack(side="left", fill="both", expand=True)
        scrollbar.configure(command=self._on_scroll)
        self.line_numbers.text_widget = self.editor
        self.line_numbers.font = self.code_font
        self.editor.bind("<<ContentChanged>>", lambda e: self.line_numbers.redraw())
        self.editor.bind("<Configure>", lambda e: self.line_numbers.redraw())

        # Single-command entry; RUN runs the whole program
        self.command_entry = ctk.CTkEntry(
            editor_frame, placeholder_text="Command (e.g. MOVE 100 100, or RUN)",
            fg_color=COLORS["bg_secondary"], text_color=COLORS["text"],
            border_color=COLORS["border"], font=(self.code_font.actual()["family"], 12),
        )
        self.command_entry.pack(fill="x", padx=6, pady=6)
        self.command_entry.bind("<Return>", self._on_command)

        self.output = OutputPanel(
            editor_frame, height=8,
            font=tkfont.Font(family=self.code_font.actual()["family"], size=10),
            bg=COLORS["output_bg"], fg=COLORS["text"],
            relief="flat", bd=0, padx=12, pady=8, wrap="word",
        )
        self.output.pack(fill="x")

    def _build_canvas(self):
        canvas_frame = tk.Frame(self.root, bg=COLORS["bg_secondary"])
        self.paned.add(canvas_frame, stretch="always")
        self.canvas = tk.Canvas(
            canvas_frame, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
            bg=CANVAS_BG, highlightthickness=0,
        )
        self.canvas.pack(padx=8, pady=8, anchor="nw")

    def _build_statusbar(self):
        status = ctk.CTkFrame(self.root, fg_color=COLORS["status_bg"], corner_radius=0)
        status.pack(fill="x", side="bottom")

        self.pen_status = ctk.CTkLabel(
            status, text="", justify="left",
            font=("Segoe UI", 9), text_color=COLORS["subtext"],
        )
        self.pen_status.pack(side="right", padx=12)

        self.status_msg = ctk.CTkLabel(
            status, text="Ready",
            font=("Segoe UI", 9), text_color=COLORS["subtext"],
        )
        self.status_msg.pack(side="left", padx=12)

    # ═══════ Helpers ═══════

    def _on_scroll(self, *args):
        self.editor.yview(*args)
        self.line_numbers.redraw()

    def _on_command(self, _event=None):
        line = self.command_entry.get()
        self.command_entry.delete(0, "end")
        self.execution_engine.execute_command(line)

    def _bind_shortcuts(self):
        self.root.bind("<F5>", lambda e: self.run_code())
        self.root.bind("<F6>", lambda e: self.syntax_check())
        self.root.bind("<Control-s>", lambda e: self.save_file())
        self.root.bind("<Control-o>", lambda e: self.load_file())
        self.root.bind("<Control-n>", lambda e: self.new_window())

    def _update_title(self):
        title = "BOOSE IDE"
        if self.file_manager.current_file:
            title = f"{os.path.basename(self.file_manager.current_file)} - {title}"
        self.root.title(title)

    def _set_status(self, msg, color=None):
        self.status_msg.configure(text=msg, text_color=color or COLORS["subtext"])

    def _refresh_pen_status(self):
        self.pen_status.configure(text=self.execution_engine.interpreter.status_text())

    def _show_error(self, kind, message, line=None):
        self.output.append(f"{kind}: {message}\n", "error")
        self._set_status(kind, COLORS["error"])
        if line:
            self.editor.mark_error_line(line)
        messagebox.showerror(kind, message, parent=self.root)

    # ═══════ Actions ═══════

    def run_code(self):
        self.execution_engine.run_code()

    def syntax_check(self):
        self.execution_engine.syntax_check()

    def load_file(self):
        self.file_manager.load_file()

    def save_file(self):
        self.file_manager.save_file()

    def new_window(self):
        BooseIDE(self.root)

    def reset_canvas(self):
        self.execution_engine.interpreter.reset()
        self.execution_engine.session.clear()
        self.output.clear()
        self._refresh_pen_status()
        self._set_status("Reset")

    def start(self):
        self.root.mainloop()


def main():
    BooseIDE().start()


if __name__ == "__main__":
    main()
