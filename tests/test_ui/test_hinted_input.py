"""Tests for bidi_entry.ui.widgets.hinted_input.HintedInput."""

from textual import events
from textual.app import App, ComposeResult

from bidi_entry.ui.widgets.hinted_input import HintedInput
from bidi_entry.utils.visual import HINT_CHAR


class _InputApp(App):
    def __init__(self, value: str = "", **kwargs) -> None:
        super().__init__()
        self._value = value
        self._kwargs = kwargs
        self.changes: list[tuple[str, str]] = []
        self.submitted: list[str] = []
        self.moves = 0

    def compose(self) -> ComposeResult:
        yield HintedInput(self._value, id="field", **self._kwargs)

    def on_mount(self) -> None:
        self.query_one(HintedInput).focus()

    def on_hinted_input_changed(self, event: HintedInput.Changed) -> None:
        self.changes.append((event.value, event.visual))

    def on_hinted_input_cursor_moved(self, event: HintedInput.CursorMoved) -> None:
        self.moves += 1

    def on_hinted_input_submitted(self, event: HintedInput.Submitted) -> None:
        self.submitted.append(event.value)


class TestTyping:
    async def test_ascii_is_not_hinted(self):
        app = _InputApp()
        async with app.run_test() as pilot:
            await pilot.press("h", "i")
            field = app.query_one(HintedInput)
            assert field.value == "hi"
            assert field.visual_value == "hi"
            assert field.hinted is False
            assert field.cursor_position == 2

    async def test_arabic_is_rendered_with_hint(self, arabic):
        app = _InputApp()
        async with app.run_test() as pilot:
            field = app.query_one(HintedInput)
            field.insert_text(arabic)
            await pilot.pause()
            assert field.value == arabic
            assert field.visual_value == HINT_CHAR + arabic
            assert app.changes[-1] == (arabic, HINT_CHAR + arabic)
            assert field.render().plain.startswith(HINT_CHAR + arabic)

    async def test_backspace_keeps_logical_text_intact(self, arabic):
        app = _InputApp(arabic)
        async with app.run_test() as pilot:
            await pilot.press("left", "backspace")
            field = app.query_one(HintedInput)
            assert field.value == arabic[:3] + arabic[4:]
            assert field.visual_value == HINT_CHAR + field.value
            assert field.cursor_position == 3

    async def test_typing_before_arabic_removes_hint(self, arabic):
        app = _InputApp(arabic)
        async with app.run_test() as pilot:
            await pilot.press("home", "a")
            field = app.query_one(HintedInput)
            assert field.value == "a" + arabic
            assert field.hinted is False
            assert field.visual_value == field.value

    async def test_value_setter_posts_changed(self, arabic):
        app = _InputApp()
        async with app.run_test() as pilot:
            field = app.query_one(HintedInput)
            field.value = "  " + arabic
            await pilot.pause()
            assert app.changes == [("  " + arabic, HINT_CHAR + "  " + arabic)]


class TestNavigation:
    async def test_cursor_moves_post_message(self):
        app = _InputApp("abc")
        async with app.run_test() as pilot:
            await pilot.press("left", "left")
            await pilot.pause()
            assert app.query_one(HintedInput).cursor_position == 1
            assert app.moves == 2

    async def test_select_all_and_replace(self, arabic):
        app = _InputApp(arabic)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+a", "x")
            field = app.query_one(HintedInput)
            assert field.value == "x"
            assert field.hinted is False


class TestSubmit:
    async def test_enter_submits_stripped_value(self):
        app = _InputApp("  hi  ")
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            assert app.submitted == ["hi"]

    async def test_enter_without_strip(self):
        app = _InputApp(" hi ", strip_on_submit=False)
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            assert app.submitted == [" hi "]


class TestRender:
    async def test_placeholder_when_empty(self):
        app = _InputApp(placeholder="Type here")
        async with app.run_test():
            field = app.query_one(HintedInput)
            assert "Type here" in field.render().plain

    async def test_max_length(self):
        app = _InputApp(max_length=2)
        async with app.run_test() as pilot:
            await pilot.press("a", "b", "c")
            assert app.query_one(HintedInput).value == "ab"

    async def test_selection_is_styled_at_visual_range(self, arabic):
        app = _InputApp(arabic)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+a")
            rendered = app.query_one(HintedInput).render()
            assert (1, 6, "on #3a3a8a") in [(s.start, s.end, s.style) for s in rendered.spans]


class TestScroll:
    async def test_long_hinted_line_scrolls_and_keeps_hint(self):
        # Screen width 14 leaves 12 cells once the horizontal padding is taken.
        app = _InputApp()
        async with app.run_test(size=(14, 3)) as pilot:
            field = app.query_one(HintedInput)
            field.insert_text(chr(0x0645) * 30)
            await pilot.pause()
            rendered = field.render()
            assert field._scroll > 0
            assert rendered.plain.startswith(HINT_CHAR + chr(0x0645))

            scroll = field._scroll
            await pilot.click("#field", offset=(1, 0))
            await pilot.pause()
            # Visual codepoint `scroll` is logical `scroll - 1`.
            assert field.cursor_position == scroll - 1

    async def test_short_line_does_not_scroll(self, arabic):
        app = _InputApp(arabic)
        async with app.run_test(size=(40, 3)):
            field = app.query_one(HintedInput)
            field.render()
            assert field._scroll == 0


class TestMouse:
    async def test_click_inside_hint_lands_on_zero(self, arabic):
        app = _InputApp(arabic)
        async with app.run_test() as pilot:
            field = app.query_one(HintedInput)
            assert field.cursor_position == 5
            await pilot.click("#field", offset=(1, 0))
            await pilot.pause()
            assert field.cursor_position == 0

    async def test_click_maps_column_to_logical_index(self, arabic):
        app = _InputApp(arabic)
        async with app.run_test() as pilot:
            field = app.query_one(HintedInput)
            await pilot.click("#field", offset=(2, 0))
            await pilot.pause()
            assert field.cursor_position == 1
            await pilot.click("#field", offset=(4, 0))
            await pilot.pause()
            assert field.cursor_position == 3

    async def test_click_past_end_goes_to_end(self):
        app = _InputApp("abc")
        async with app.run_test() as pilot:
            field = app.query_one(HintedInput)
            await pilot.press("home")
            await pilot.click("#field", offset=(20, 0))
            await pilot.pause()
            assert field.cursor_position == 3


class TestPaste:
    async def test_paste_inserts_text(self, arabic):
        app = _InputApp()
        async with app.run_test() as pilot:
            field = app.query_one(HintedInput)
            field.post_message(events.Paste(arabic))
            await pilot.pause()
            assert field.value == arabic
            assert field.hinted is True

    async def test_paste_drops_line_breaks(self):
        app = _InputApp("x")
        async with app.run_test() as pilot:
            field = app.query_one(HintedInput)
            field.post_message(events.Paste("a\nb\r\nc"))
            await pilot.pause()
            assert field.value == "xabc"
