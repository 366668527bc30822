#!/usr/bin/env python3
"""Writes fake Laravel errors to a log while tailing it in a Textual app."""

import logging
import random
from pathlib import Path

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Footer, Header

from tracetail import ViewerConfig
from tracetail.ui.textual import TailWidget

FRAMES = [
    "/srv/app/vendor/laravel/framework/src/Illuminate/Pipeline/Pipeline.php(183): Illuminate\\Pipeline\\Pipeline->Illuminate\\Pipeline\\{closure}()",
    "/srv/app/vendor/laravel/framework/src/Illuminate/Routing/Router.php(805): Illuminate\\Pipeline\\Pipeline->then()",
    "/srv/app/vendor/laravel/framework/src/Illuminate/Container/BoundMethod.php(36): App\\Http\\Controllers\\OrderController->store()",
    "/srv/app/app/Http/Controllers/OrderController.php(42): App\\Services\\Payments->charge()",
    "/srv/app/app/Services/Payments.php(88): Stripe\\StripeClient->request()",
    "/srv/app/vendor/stripe/stripe-php/lib/BaseStripeClient.php(94): Stripe\\ApiRequestor->request()",
]


class TailDemo(App):
    CSS = """
    #main_container {
        align: center middle;
    }

    #log_display {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.title = "tracetail demo"

        # Setup logging
        log_file = Path("./logs/textual_demo.log")
        log_file.parent.mkdir(exist_ok=True)

        logging.basicConfig(
            filename=log_file,
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            filemode="a",
        )
        self.logger = logging.getLogger(__name__)

        self.log_file = Path("./logs/laravel.log")
        self.log_file.touch()
        self.errors = 0

        self.logger.info("Textual demo app started")

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main_container"):
            yield TailWidget(self.log_file, ViewerConfig(base_path="/srv/app"), id="log_display")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(TailWidget).focus()
        self.set_interval(2.0, self.write_error)

    def write_error(self) -> None:
        """Append one error with a random stack trace to the log."""
        self.errors += 1
        frames = random.choices(FRAMES, k=random.randint(3, 12))
        with open(self.log_file, "a") as f:
            f.write(
                f"[2024-05-01 10:00:{self.errors % 60:02d}] local.ERROR: Payment failed "
                f'{{"exception":"[object] (RuntimeException(code: 0): Payment failed at /srv/app/app/Services/Payments.php:88)\n'
            )
            f.write("[stacktrace]\n")
            for number, frame in enumerate(frames):
                f.write(f"#{number} {frame}\n")
            f.write(f"#{len(frames)} {{main}}\n")
            f.write('"}\n')

    def on_tail_widget_vendor_toggled(self, event: TailWidget.VendorToggled) -> None:
        self.sub_title = f"v: {event.label}"
        self.logger.info(f"Vendor frames {'hidden' if event.hide_vendor else 'shown'}")


def run_demo() -> None:
    TailDemo().run()


if __name__ == "__main__":
    run_demo()
