"""
Pytest configuration for table_layout
"""

import logging
import sys

import pytest


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep test output to warnings and errors."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


class RecordingSurface:
    """
    In-memory surface that records every drawing call.

    Text advances the cursor by font size plus line gap. Page breaks happen
    only on the page checks listed in ``break_on_checks`` (0-based).
    """

    def __init__(self, page_width=612, page_height=792, margin=36, title="", break_on_checks=()):
        self.page_width = page_width
        self.page_height = page_height
        self.margins = {"top": margin, "right": margin, "bottom": margin, "left": margin}
        self.title = title
        self.break_on_checks = set(break_on_checks)

        self.page_left = margin
        self.content_width = page_width - 2 * margin
        self.x = margin
        self.y = margin
        self.current_page = -1
        self.page_count = 0
        self.page_number = 0
        self.listeners = []

        self.font = "Helvetica"
        self.font_size = 12
        self.fill_color = "black"
        self._stack = []

        self.texts = []
        self.lines = []
        self.transforms = []
        self.checks = []
        self.switches = []

    def add_page_listener(self, listener):
        self.listeners.append(listener)

    def add_page(self):
        self.page_count += 1
        self.current_page = self.page_count - 1
        self.page_number += 1
        self.x, self.y = self.page_left, self.margins["top"]
        for listener in self.listeners:
            listener(self)
        self.x, self.y = self.page_left, self.margins["top"]
        return self.current_page

    def switch_to_page(self, index):
        self.switches.append(index)
        self.current_page = index

    def add_page_if_needed(self, current_page, page_count, needed_height=0.0):
        check = len(self.checks)
        self.checks.append((current_page, page_count, needed_height))
        if check not in self.break_on_checks:
            return False
        if current_page + 1 < page_count:
            self.current_page = current_page + 1
            self.x, self.y = self.page_left, self.margins["top"]
        else:
            self.add_page()
        return True

    def move_down(self, amount):
        self.y += amount

    def set_fill_color(self, color):
        self.fill_color = color

    def set_font(self, name):
        self.font = name

    def set_font_size(self, size):
        self.font_size = size

    def save_state(self):
        self._stack.append((self.font, self.font_size, self.fill_color))

    def restore_state(self):
        self.font, self.font_size, self.fill_color = self._stack.pop()

    def transform(self, a, b, c, d, e, f):
        self.transforms.append((a, b, c, d, e, f))

    def text(self, text, x=None, y=None, **options):
        self.texts.append({
            "text": text,
            "x": x,
            "y": y,
            "drawn_at": (x if x is not None else self.x, y if y is not None else self.y),
            "page": self.current_page,
            "font": self.font,
            "font_size": self.font_size,
            "color": self.fill_color,
            "options": options,
        })
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y
        if options.get("continued"):
            self.x += len(text) * self.font_size * 0.5
            return
        self.y += self.font_size + options.get("line_gap", 0)

    def stroke_line(self, x1, y1, x2, y2, width=1.0, color=None):
        self.lines.append({
            "start": (x1, y1),
            "end": (x2, y2),
            "width": width,
            "color": color,
            "page": self.current_page,
        })


@pytest.fixture
def surface():
    """Recording surface with one page already added."""
    s = RecordingSurface()
    s.add_page()
    return s


@pytest.fixture
def make_surface():
    """Factory for recording surfaces with a first page."""
    def _make(**kwargs):
        s = RecordingSurface(**kwargs)
        s.add_page()
        return s
    return _make
