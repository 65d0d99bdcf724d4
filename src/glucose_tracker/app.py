"""App Kivy: alta de lecturas, lista, grafico y recomendaciones."""

from __future__ import annotations

import traceback
from pathlib import Path

from glucose_tracker.analyzer import format_counts
from glucose_tracker.chart import (
    X_AXIS_TITLE,
    ChartSeries,
    build_chart_series,
    reading_lines,
    scale_points,
)
from glucose_tracker.model import InvalidInputError
from glucose_tracker.storage import DEFAULT_STORAGE_KEY, SQLiteStore
from glucose_tracker.tracker import INVALID_INPUT_MESSAGE, ReadingTracker


def run_app(db_path: Path, storage_key: str = DEFAULT_STORAGE_KEY) -> int:
    """Lanza la app Kivy."""
    from kivy.app import App
    from kivy.core.window import Window
    from kivy.graphics import Color, Line
    from kivy.logger import Logger
    from kivy.uix.boxlayout import BoxLayout
    from kivy.uix.button import Button
    from kivy.uix.label import Label
    from kivy.uix.popup import Popup
    from kivy.uix.textinput import TextInput
    from kivy.uix.widget import Widget

    class GlucoseChart(Widget):
        """Line chart of the reading sequence drawn on the canvas."""

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self.series = build_chart_series([])
            self.bind(pos=self._redraw, size=self._redraw)

        def update(self, series: ChartSeries) -> None:
            self.series = series
            self._redraw()

        def _redraw(self, *_args: object) -> None:
            self.canvas.clear()
            points = scale_points(self.series, self.width, self.height)
            shifted = [
                value + (self.x if i % 2 == 0 else self.y)
                for i, value in enumerate(points)
            ]
            with self.canvas:
                Color(0.29, 0.75, 0.75)
                if len(shifted) >= 4:
                    Line(points=shifted, width=1.5)
                elif shifted:
                    Line(circle=(shifted[0], shifted[1], 3))

    class GlucoseTrackerApp(App):
        """Main Kivy app."""

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self.store = SQLiteStore(db_path)
            self.app_config = self.store.load_config()
            self.tracker = ReadingTracker(self.store, storage_key)
            self.time_input: TextInput | None = None
            self.glucose_input: TextInput | None = None
            self.readings_view: TextInput | None = None
            self.chart: GlucoseChart | None = None
            self.chart_caption: Label | None = None
            self.recommendation: Label | None = None
            self.counts_label: Label | None = None
            self.status: Label | None = None
            Logger.info(
                "GlucoseTracker: loaded %d readings from %s",
                len(self.tracker.readings),
                db_path,
            )

        def build(self) -> BoxLayout:
            self.title = "Diabetes Tracker"
            Window.bind(on_key_down=self._on_key_down)
            Window.fullscreen = self.app_config.fullscreen

            root = BoxLayout(orientation="vertical", spacing=8, padding=10)
            root.add_widget(
                Label(text="Diabetes Tracker", size_hint_y=None, height=36)
            )

            form = BoxLayout(
                orientation="horizontal",
                spacing=8,
                size_hint_y=None,
                height=40,
            )
            form.add_widget(Label(text="Time (HH:MM):", size_hint_x=0.2))
            self.time_input = TextInput(multiline=False, hint_text="08:30")
            form.add_widget(self.time_input)
            form.add_widget(Label(text="Glucose Level (mg/dL):", size_hint_x=0.3))
            self.glucose_input = TextInput(
                multiline=False,
                input_filter="float",
                hint_text="Enter glucose level",
            )
            form.add_widget(self.glucose_input)
            add_btn = Button(text="Add Data", size_hint_x=0.2)
            add_btn.bind(on_press=self._on_add)
            form.add_widget(add_btn)
            root.add_widget(form)

            self.status = Label(text="", size_hint_y=None, height=30)
            root.add_widget(self.status)

            root.add_widget(Label(text="Recorded Data", size_hint_y=None, height=30))
            self.readings_view = TextInput(readonly=True, multiline=True)
            root.add_widget(self.readings_view)

            root.add_widget(Label(text="Glucose Chart", size_hint_y=None, height=30))
            self.chart = GlucoseChart()
            root.add_widget(self.chart)
            self.chart_caption = Label(text="", size_hint_y=None, height=24)
            root.add_widget(self.chart_caption)

            root.add_widget(
                Label(text="Recommendations", size_hint_y=None, height=30)
            )
            self.recommendation = Label(text="", size_hint_y=None, height=48)
            root.add_widget(self.recommendation)
            self.counts_label = Label(text="", size_hint_y=None, height=24)
            root.add_widget(self.counts_label)

            self._refresh()
            return root

        def _on_key_down(
            self,
            _window: object,
            keycode: int,
            _scancode: int,
            _text: str,
            _modifiers: list[str],
        ) -> bool:
            # F11: alternar fullscreen. Esc: salir de fullscreen o cerrar app.
            if keycode == 292:
                self._set_fullscreen(not Window.fullscreen)
                return True
            if keycode != 27:
                return False
            if Window.fullscreen:
                self._set_fullscreen(False)
            else:
                self.stop()
            return True

        def _set_fullscreen(self, fullscreen: bool) -> None:
            Window.fullscreen = fullscreen
            self.app_config = self.store.update_config(fullscreen=fullscreen)

        def _on_add(self, _: object) -> None:
            if self.time_input is None or self.glucose_input is None:
                return
            time_text = self.time_input.text
            glucose_text = self.glucose_input.text
            try:
                reading = self.tracker.add_reading(time_text, glucose_text)
            except InvalidInputError:
                Logger.warning(
                    "GlucoseTracker: rejected reading time=%r glucose=%r",
                    time_text,
                    glucose_text,
                )
                self._show_invalid_input()
                return
            except Exception as exc:
                self._show_error("guardar", exc)
                return

            Logger.info(
                "GlucoseTracker: added reading %s = %s", reading.time, reading.glucose
            )
            self.time_input.text = ""
            self.glucose_input.text = ""
            if self.status is not None:
                self.status.text = ""
            self._refresh()

        def _refresh(self) -> None:
            readings = self.tracker.readings
            if self.readings_view is not None:
                self.readings_view.text = "\n".join(reading_lines(readings))
            series = build_chart_series(
                readings,
                y_min=self.app_config.chart_min,
                y_max=self.app_config.chart_max,
            )
            if self.chart is not None:
                self.chart.update(series)
            if self.chart_caption is not None:
                self.chart_caption.text = (
                    f"{series.label}: {series.y_min:g}-{series.y_max:g}  |  "
                    f"{X_AXIS_TITLE}: {', '.join(series.labels)}"
                )
            if self.recommendation is not None:
                self.recommendation.text = self.tracker.recommendation
            if self.counts_label is not None:
                self.counts_label.text = format_counts(self.tracker.trend_counts())

        def _show_invalid_input(self) -> None:
            content = BoxLayout(orientation="vertical", spacing=8, padding=8)
            content.add_widget(Label(text=INVALID_INPUT_MESSAGE))
            ok_btn = Button(text="OK", size_hint_y=None, height=40)
            content.add_widget(ok_btn)
            popup = Popup(
                title="Invalid input",
                content=content,
                size_hint=(0.6, 0.4),
                auto_dismiss=False,
            )
            ok_btn.bind(on_press=lambda *_args: popup.dismiss())
            popup.open()

        def _show_error(self, action: str, exc: Exception) -> None:
            error_type = type(exc).__name__
            Logger.error("GlucoseTracker: error al %s: %s", action, exc)
            if self.status is not None:
                self.status.text = f"Error al {action} ({error_type}): {exc}"
            if self.readings_view is not None:
                self.readings_view.text = traceback.format_exc()

    GlucoseTrackerApp().run()
    return 0
