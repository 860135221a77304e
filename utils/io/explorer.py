"""
TUI for exploring image templates and their palette cycling.

Usage:
    python -m utils.io.explorer
"""

import json
import logging
from fractions import Fraction

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.coordinate import Coordinate
from textual.screen import Screen
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Label,
    Static,
)

from calculator import build_state
from templates import available_templates, discover_templates, get_template
from utils.display import batches_table, image_to_rich_text, preview_step
from vectorize import (
    ConversionOptions,
    ImageFormatError,
    VectorImage,
    VertexBudgetError,
    displayed_palette,
    vectorize,
)

logger = logging.getLogger(__name__)

# Animation refresh, in seconds of image time per tick
TICK = Fraction(1, 10)
PREVIEW_COLUMNS = 80


class ImageDetailScreen(Screen):
    """Screen animating one template through its cycling palette."""

    BINDINGS = [
        Binding("escape", "pop_screen", "Back"),
        Binding("q", "pop_screen", "Back"),
        Binding("space", "toggle_play", "Play/Pause"),
        Binding("right", "step(1)", "Step"),
        Binding("left", "step(-1)", "Step back"),
        Binding("e", "export", "Export state"),
    ]

    CSS = """
    ImageDetailScreen {
        background: $surface;
    }

    .image-title {
        text-align: center;
        text-style: bold;
        padding: 1;
        background: $primary;
        color: $text;
        width: 100%;
    }

    .image-time {
        color: $text-muted;
        padding: 0 2;
    }

    .image-display {
        padding: 1 2;
        height: auto;
        width: auto;
    }

    #content {
        height: 100%;
        padding: 1 2;
    }
    """

    def __init__(self, template_name: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.template_name = template_name
        self.vector_image: VectorImage | None = None
        self.time = Fraction(0)
        self.playing = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield ScrollableContainer(id="content")
        yield Footer()

    def on_mount(self) -> None:
        """Vectorize the template and display it."""
        container = self.query_one("#content")
        template = get_template(self.template_name)
        try:
            image = template.load()
            self.vector_image = vectorize(image, template.configure(ConversionOptions()))
        except (FileNotFoundError, ImageFormatError, VertexBudgetError) as error:
            container.mount(Label(f"Cannot load {self.template_name}: {error}"))
            return

        container.mount(Label(template.description, classes="image-title"))
        container.mount(Label("", id="time", classes="image-time"))
        container.mount(Static("", id="image", classes="image-display"))
        container.mount(Static(batches_table(self.vector_image)))
        self.refresh_image()
        self.set_interval(float(TICK), self.tick)

    def refresh_image(self) -> None:
        if self.vector_image is None:
            return
        image = self.vector_image.image
        palette = displayed_palette(self.vector_image.formulas, image.colors, self.time)
        step = preview_step(image, PREVIEW_COLUMNS)
        self.query_one("#image", Static).update(
            image_to_rich_text(image, palette, step=step)
        )
        self.query_one("#time", Label).update(f"T = {float(self.time):.1f}s")

    def tick(self) -> None:
        if self.playing:
            self.time += TICK
            self.refresh_image()

    def action_toggle_play(self) -> None:
        self.playing = not self.playing

    def action_step(self, direction: int) -> None:
        self.time = max(Fraction(0), self.time + direction * TICK)
        self.refresh_image()

    def action_export(self) -> None:
        """Write the calculator state next to the working directory."""
        if self.vector_image is None:
            return
        path = f"{self.template_name}.state.json"
        with open(path, "w") as file:
            json.dump(build_state(self.vector_image), file)
        self.notify(f"State written to {path}")


class ImageListScreen(Screen):
    """Main screen showing the registered templates."""

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("enter", "select_template", "View"),
    ]

    CSS = """
    ImageListScreen {
        background: $surface;
    }

    DataTable {
        height: 100%;
    }

    DataTable > .datatable--header {
        text-style: bold;
        background: $primary;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="template-table")
        yield Footer()

    def on_mount(self) -> None:
        """Populate the template table."""
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.add_columns("Template", "Size", "Active cycles")

        for name in available_templates():
            try:
                image = get_template(name).load()
            except (FileNotFoundError, ImageFormatError) as error:
                logger.warning(f"Skipping {name}: {error}")
                table.add_row(name, "?", "?", key=name)
                continue
            active = sum(1 for cycle in image.cycles if cycle.is_active)
            table.add_row(
                name, f"{image.width}x{image.height}", str(active), key=name
            )

    def get_selected_template(self) -> str | None:
        table = self.query_one(DataTable)
        if table.cursor_row is not None and table.row_count:
            return str(table.get_cell_at(Coordinate(table.cursor_row, 0)))
        return None

    def action_select_template(self) -> None:
        name = self.get_selected_template()
        if name:
            self.app.push_screen(ImageDetailScreen(name))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Handle double-click on a row."""
        if event.row_key:
            self.app.push_screen(ImageDetailScreen(str(event.row_key.value)))


class ExplorerApp(App):
    """TUI application for previewing palette-cycling templates."""

    TITLE = "Palette Cycle Explorer"
    SUB_TITLE = "Preview templates and export calculator states"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("d", "toggle_dark", "Toggle Dark Mode"),
    ]

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def on_mount(self) -> None:
        """Push the main screen."""
        self.push_screen(ImageListScreen())

    def action_toggle_dark(self) -> None:
        """Toggle dark mode."""
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"


def main():
    """Run the explorer."""
    discover_templates()
    app = ExplorerApp()
    app.run()


if __name__ == "__main__":
    main()
