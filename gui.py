"""
GUI for RetroCalc
Tkinter keypad that sequences button taps into Session calls
"""
import tkinter as tk

import config
from arithmetic import Operator
from session import Session

OPERATOR_KEYS = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "×": Operator.MULTIPLY,
    "÷": Operator.DIVIDE,
}


# Separator keys are named; their faces show the locale's characters.
SEPARATOR_KEYS = ("DEC", "COLON", "SLASH")

KEYPAD_ROWS = [
    ["MR", "STO", "RST", "SWP"],
    ["TIME", "A/P", "DAY", "DATE"],
    ["→H", "→T", "%", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["0", "DEC", "COLON", "SLASH"],
    ["C", "±", "NOW", "="],
]


def button_text(key, calc_config):
    """Face of a keypad button"""
    faces = {
        "DEC": calc_config.decimal_separator,
        "COLON": calc_config.time_separator,
        "SLASH": calc_config.date_separator,
    }
    return faces.get(key, key)


class RetroCalcGUI:
    def __init__(self, root, session: Session):
        self.root = root
        self.session = session
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")
        self.T = config.LED_PALETTE
        self.root.configure(bg=self.T["bg"])

        calc_config = session.config
        self.typed_separators = {
            calc_config.decimal_separator: "DEC",
            calc_config.time_separator: "COLON",
            calc_config.date_separator: "SLASH",
        }
        self.actions = {
            "DEC": session.decimal_pressed,
            "COLON": session.colon_pressed,
            "SLASH": session.slash_pressed,
            "=": session.equals_pressed,
            "C": session.clear_pressed,
            "%": session.percent_pressed,
            "±": session.plus_minus_pressed,
            "MR": session.memory_recall_pressed,
            "STO": session.memory_store_pressed,
            "RST": session.reset_pressed,
            "SWP": session.swap_pressed,
            "TIME": session.time_pressed,
            "A/P": session.am_pm_pressed,
            "DAY": session.day_of_week_pressed,
            "DATE": session.current_date_pressed,
            "NOW": session.current_time_pressed,
            "→H": session.time_to_decimal_pressed,
            "→T": session.decimal_to_time_pressed,
        }

        self.create_widgets()
        self.update_display()
        self.root.bind('<Key>', self.on_key_press)
        self.root.after(config.CLOCK_REFRESH_MS, self._tick)

    def _led_btn(self, parent, text, command=None, kind="normal"):
        """Create a flat keypad button."""
        T = self.T
        if kind == "operator":
            bg, fg = T["btn_bg"], T["operator_fg"]
        elif kind == "mode":
            bg, fg = T["btn_bg"], T["mode_fg"]
        elif kind == "danger":
            bg, fg = T["danger_bg"], "#FFFFFF"
        elif kind == "equals":
            bg, fg = T["equals_bg"], T["operator_fg"]
        else:
            bg, fg = T["btn_bg"], T["btn_fg"]
        return tk.Button(
            parent, text=text, command=command,
            font=config.BUTTON_FONT,
            bg=bg, fg=fg,
            activebackground=T["equals_bg"], activeforeground=fg,
            relief=tk.FLAT, bd=0, highlightthickness=1,
            highlightbackground=T["bg"],
        )

    def create_widgets(self):
        T = self.T
        display_frame = tk.Frame(self.root, bg=T["display_bg"])
        display_frame.pack(side=tk.TOP, fill=tk.X, padx=10, pady=10)

        self.operator_label = tk.Label(display_frame, text="", font=config.OPERATOR_FONT,
                                       bg=T["display_bg"], fg=T["led_on"], width=2, anchor="w")
        self.operator_label.pack(side=tk.LEFT, padx=(6, 0))

        self.ampm_label = tk.Label(display_frame, text="", font=config.LABEL_FONT,
                                   bg=T["display_bg"], fg=T["led_on"], width=3)
        self.ampm_label.pack(side=tk.LEFT)

        self.display = tk.Label(display_frame, text="0", font=config.DISPLAY_FONT,
                                bg=T["display_bg"], fg=T["led_on"], anchor="e")
        self.display.pack(side=tk.RIGHT, fill=tk.X, expand=True, padx=6, pady=8)

        keypad = tk.Frame(self.root, bg=T["bg"])
        keypad.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=6, pady=(0, 6))

        for row_idx, row in enumerate(KEYPAD_ROWS):
            keypad.rowconfigure(row_idx, weight=1)
            for col_idx, key in enumerate(row):
                keypad.columnconfigure(col_idx, weight=1)
                if key in OPERATOR_KEYS:
                    kind = "operator"
                elif key == "=":
                    kind = "equals"
                elif key == "C":
                    kind = "danger"
                elif key.isdigit() or key in SEPARATOR_KEYS:
                    kind = "normal"
                else:
                    kind = "mode"
                btn = self._led_btn(keypad, button_text(key, self.session.config),
                                    command=lambda b=key: self.calculator_button_click(b),
                                    kind=kind)
                btn.grid(row=row_idx, column=col_idx, sticky="nsew", padx=2, pady=2)

    def calculator_button_click(self, button):
        """Handle calculator button clicks"""
        if button.isdigit():
            success = self.session.number_pressed(int(button))
        elif button in OPERATOR_KEYS:
            success = self.session.operator_pressed(OPERATOR_KEYS[button])
        elif button in self.actions:
            success = self.actions[button]()
        else:
            return
        self.handle_tap_result(success)

    def on_key_press(self, event):
        """Handle keyboard input"""
        key = event.char
        if key in ('*', 'x'):
            self.calculator_button_click('×')
        elif key in OPERATOR_KEYS:
            self.calculator_button_click(key)
        elif key in self.typed_separators:
            self.calculator_button_click(self.typed_separators[key])
        elif key == '/':
            self.calculator_button_click('÷')
        elif key in ['\r', '\n', '=']:
            self.calculator_button_click('=')
        elif event.keysym == 'Escape':
            self.calculator_button_click('C')
        elif key and key.isdigit():
            self.calculator_button_click(key)

    def handle_tap_result(self, success):
        self.update_display()
        if success:
            self.blink()
        else:
            self.double_blink()

    def update_display(self):
        """Update the display"""
        session = self.session
        self.display.config(text=session.display_string())
        self.operator_label.config(text=session.operator_symbol() or "")
        if not session.is_time_of_day():
            self.ampm_label.config(text="")
        elif session.config.uses_24_hour_clock:
            self.ampm_label.config(text="24")
        else:
            self.ampm_label.config(text="PM" if session.is_pm() else "AM")

    # Slow single blink for successful entry, fast double blink for error.
    def blink_display(self, on):
        color = self.T["led_on"] if on else self.T["led_off"]
        for label in (self.display, self.operator_label, self.ampm_label):
            label.config(fg=color)

    def blink(self):
        self.blink_display(False)
        self.root.after(config.BLINK_MS, lambda: self.blink_display(True))

    def double_blink(self):
        step = config.DOUBLE_BLINK_MS
        self.blink_display(False)
        self.root.after(step, lambda: self.blink_display(True))
        self.root.after(step * 2, lambda: self.blink_display(False))
        self.root.after(step * 3, lambda: self.blink_display(True))

    def _tick(self):
        if self.session.refresh_clock():
            self.update_display()
        self.root.after(config.CLOCK_REFRESH_MS, self._tick)
