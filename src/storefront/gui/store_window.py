#!/usr/bin/env python3
"""
Storefront - Qt window for browsing the catalog and installing apps.

A thin PyQt6 shell over StoreSession: it renders whatever the catalog
store and navigation controller report and forwards user actions to
them. Icons and screenshots are shown as references, not loaded.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QScrollArea, QFrame, QProgressBar, QGridLayout,
    QStackedWidget, QMessageBox,
)
from PyQt6.QtCore import Qt, QThread, pyqtSignal
from PyQt6.QtGui import QFont

from common.exceptions import InvalidPackageError
from common.logging_config import setup_logging

from ..models import App
from ..navigation import ViewState
from ..session import StoreSession

logger = logging.getLogger(__name__)

ACCENT = "#00ff88"
TABS = ["Today", "Games", "Apps", "Search"]


class CatalogLoadWorker(QThread):
    """Background thread running the session's one catalog load."""
    loaded = pyqtSignal()

    def __init__(self, session: StoreSession):
        super().__init__()
        self.session = session

    def run(self):
        asyncio.run(self.session.start())
        self.loaded.emit()


class AppCard(QFrame):
    """Card widget displaying an application in the list."""

    def __init__(self, app: App, on_select):
        super().__init__()
        self.app = app
        self.on_select = on_select

        self.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Raised)
        self.setStyleSheet(f"""
            AppCard {{
                background-color: #1e1e1e;
                border: 2px solid #2d2d2d;
                border-radius: 24px;
                padding: 16px;
            }}
            AppCard:hover {{
                border-color: {ACCENT};
            }}
        """)

        layout = QVBoxLayout(self)
        layout.setSpacing(8)
        layout.setAlignment(Qt.AlignmentFlag.AlignHCenter)

        icon_label = QLabel(app.icon_url)
        icon_label.setStyleSheet("color: #888888; font-size: 9px;")
        icon_label.setWordWrap(True)
        layout.addWidget(icon_label)

        name_label = QLabel(app.name)
        name_label.setFont(QFont("", 12, QFont.Weight.ExtraBold))
        name_label.setStyleSheet("color: white;")
        layout.addWidget(name_label)

        subtitle_label = QLabel(app.subtitle)
        subtitle_label.setStyleSheet(f"color: {ACCENT}; font-size: 11px;")
        layout.addWidget(subtitle_label)

        rating_row = QHBoxLayout()
        rating_label = QLabel(f"{app.rating_label} ★")
        rating_label.setStyleSheet("color: yellow; font-weight: bold;")
        rating_row.addWidget(rating_label)
        reviews_label = QLabel(app.reviews_label)
        reviews_label.setStyleSheet("color: #888888; font-size: 10px;")
        rating_row.addWidget(reviews_label)
        rating_row.addStretch()
        layout.addLayout(rating_row)

        # GET on the card opens the detail page, same as clicking the card
        get_btn = QPushButton("GET")
        get_btn.setStyleSheet(_button_style())
        get_btn.clicked.connect(self._on_select_clicked)
        layout.addWidget(get_btn)

    def mouseReleaseEvent(self, event):
        self._on_select_clicked()
        super().mouseReleaseEvent(event)

    def _on_select_clicked(self):
        self.on_select(self.app)


class DetailPage(QWidget):
    """Detail view for one app with its screenshot carousel."""

    def __init__(self, session: StoreSession):
        super().__init__()
        self.session = session
        carousel = session.navigation.carousel
        app = session.navigation.selected_app

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 20)
        layout.setSpacing(12)

        close_btn = QPushButton("✕")
        close_btn.setFixedWidth(40)
        close_btn.clicked.connect(self.session.navigation.go_back)
        layout.addWidget(close_btn, alignment=Qt.AlignmentFlag.AlignLeft)

        # Carousel
        self.screenshot_label = QLabel()
        self.screenshot_label.setMinimumHeight(240)
        self.screenshot_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.screenshot_label.setWordWrap(True)
        self.screenshot_label.setStyleSheet("background-color: #111111; color: #cccccc;")
        layout.addWidget(self.screenshot_label)

        pager = QHBoxLayout()
        self.prev_btn = QPushButton("‹")
        self.prev_btn.clicked.connect(self._on_previous)
        self.page_label = QLabel()
        self.page_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.next_btn = QPushButton("›")
        self.next_btn.clicked.connect(self._on_next)
        pager.addWidget(self.prev_btn)
        pager.addWidget(self.page_label, 1)
        pager.addWidget(self.next_btn)
        layout.addLayout(pager)

        if carousel is None or carousel.page_count == 0:
            self.screenshot_label.setVisible(False)
            self.prev_btn.setVisible(False)
            self.next_btn.setVisible(False)
            self.page_label.setVisible(False)

        # Header
        header = QVBoxLayout()
        name_label = QLabel(app.name)
        name_label.setFont(QFont("", 22, QFont.Weight.Black))
        header.addWidget(name_label)
        subtitle_label = QLabel(app.subtitle)
        subtitle_label.setStyleSheet(f"color: {ACCENT}; font-size: 14px;")
        header.addWidget(subtitle_label)
        layout.addLayout(header)

        self.install_btn = QPushButton("GET")
        self.install_btn.setMinimumHeight(60)
        self.install_btn.setStyleSheet(_button_style(font_px=22))
        self.install_btn.clicked.connect(self._on_install)
        layout.addWidget(self.install_btn)

        meta_label = QLabel(app.version_label)
        meta_label.setStyleSheet("color: #888888;")
        layout.addWidget(meta_label)

        desc_label = QLabel(app.description)
        desc_label.setWordWrap(True)
        desc_label.setStyleSheet("color: #dddddd; font-size: 14px;")
        layout.addWidget(desc_label)
        layout.addStretch()

        self._refresh_carousel()

    def _on_previous(self):
        if self.session.navigation.carousel.swipe_previous():
            self._refresh_carousel()

    def _on_next(self):
        if self.session.navigation.carousel.swipe_next():
            self._refresh_carousel()

    def _refresh_carousel(self):
        carousel = self.session.navigation.carousel
        if carousel is None or carousel.page_count == 0:
            return
        self.screenshot_label.setText(carousel.current_screenshot)
        self.page_label.setText(f"{carousel.current_index + 1} / {carousel.page_count}")
        self.prev_btn.setEnabled(carousel.current_index > 0)
        self.next_btn.setEnabled(carousel.current_index < carousel.page_count - 1)

    def _on_install(self):
        try:
            self.session.install_selected()
        except InvalidPackageError as e:
            QMessageBox.warning(self, "Cannot install", e.message)


class StoreWindow(QMainWindow):
    """Main storefront window."""

    def __init__(self, session: StoreSession):
        super().__init__()
        self.session = session
        self.setWindowTitle("Storefront")
        self.setMinimumSize(900, 700)

        self.setStyleSheet("""
            QMainWindow {
                background-color: #0a0a0a;
            }
            QLabel {
                color: white;
            }
        """)

        self._detail_page: Optional[DetailPage] = None
        self._worker: Optional[CatalogLoadWorker] = None

        self._build_ui()
        self.session.navigation.add_listener(self._on_navigation)

    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.pages = QStackedWidget()
        main_layout.addWidget(self.pages, 1)

        # Loading page
        self.loading_page = QWidget()
        loading_layout = QVBoxLayout(self.loading_page)
        spinner = QProgressBar()
        spinner.setRange(0, 0)  # indeterminate
        spinner.setTextVisible(False)
        spinner.setMaximumWidth(200)
        spinner.setStyleSheet(f"QProgressBar::chunk {{ background-color: {ACCENT}; }}")
        loading_layout.addWidget(spinner, alignment=Qt.AlignmentFlag.AlignCenter)
        self.pages.addWidget(self.loading_page)

        # List page
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setStyleSheet("QScrollArea { border: none; background-color: #0a0a0a; }")
        self.apps_container = QWidget()
        self.apps_layout = QGridLayout(self.apps_container)
        self.apps_layout.setSpacing(16)
        self.apps_layout.setContentsMargins(16, 16, 16, 16)
        scroll.setWidget(self.apps_container)
        self.list_page = scroll
        self.pages.addWidget(self.list_page)

        # Bottom bar, tabs are decorative
        self.tab_bar = QWidget()
        self.tab_bar.setFixedHeight(56)
        self.tab_bar.setStyleSheet("background-color: #050505;")
        tab_layout = QHBoxLayout(self.tab_bar)
        for name in TABS:
            tab = QLabel(name)
            tab.setAlignment(Qt.AlignmentFlag.AlignCenter)
            tab.setStyleSheet(f"color: {ACCENT};")
            tab_layout.addWidget(tab)
        main_layout.addWidget(self.tab_bar)

        self.pages.setCurrentWidget(self.loading_page)

    def start(self):
        """Kick off the session's catalog load."""
        self._worker = CatalogLoadWorker(self.session)
        self._worker.loaded.connect(self._on_catalog_loaded)
        self._worker.start()

    def _on_catalog_loaded(self):
        self._populate_list()
        if not self.session.navigation.state.is_detail:
            self.pages.setCurrentWidget(self.list_page)

    def _populate_list(self):
        while self.apps_layout.count():
            item = self.apps_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        cols = 3
        for i, app in enumerate(self.session.store.current_catalog()):
            card = AppCard(app, self.session.navigation.select_app)
            self.apps_layout.addWidget(card, i // cols, i % cols)

    def _on_navigation(self, state: ViewState):
        if self._detail_page is not None:
            self.pages.removeWidget(self._detail_page)
            self._detail_page.deleteLater()
            self._detail_page = None

        if state.is_detail:
            self._detail_page = DetailPage(self.session)
            self.pages.addWidget(self._detail_page)
            self.pages.setCurrentWidget(self._detail_page)
            self.tab_bar.setVisible(False)
        else:
            self.pages.setCurrentWidget(self.list_page)
            self.tab_bar.setVisible(True)


def _button_style(font_px: int = 16) -> str:
    return f"""
        QPushButton {{
            background-color: {ACCENT};
            color: black;
            border: none;
            border-radius: 16px;
            padding: 8px 16px;
            font-weight: bold;
            font-size: {font_px}px;
        }}
    """


def main():
    """Entry point for the storefront window."""
    setup_logging(level=logging.INFO)
    logger.info("Starting storefront")

    app = QApplication(sys.argv)
    app.setApplicationName("Storefront")

    session = StoreSession()
    window = StoreWindow(session)
    window.show()
    window.start()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
