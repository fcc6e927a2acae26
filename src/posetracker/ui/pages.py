# src/posetracker/ui/pages.py
from typing import List, Tuple

from PySide6 import QtCore, QtGui, QtWidgets

from ..config import WINDOW_TITLE, APP_FOOTER, FRAME_SIZE

PAGE_QSS = "background-color: #000; color: white;"  # all pages share the dark theme
TITLE_QSS = "font-size: 42px; font-weight: bold; color: white; margin-bottom: 30px;"
WELCOME_QSS = "background-color: #003366; color: white; font-weight: bold; font-size: 18px; padding: 14px; border-radius: 8px;"
SELECT_QSS = "background-color: #444; color: white; font-weight: bold; font-size: 16px; padding: 12px; border-radius: 8px;"
RESET_QSS = "background-color: #FF4444; color: white; font-weight: bold; font-size: 16px; padding: 12px; border-radius: 8px;"
BACK_QSS = "background-color: #444; color: white; font-weight: bold; font-size: 16px; padding: 8px 12px; border-radius: 8px;"


def _title(text: str, parent: QtWidgets.QWidget) -> QtWidgets.QLabel:
    lbl = QtWidgets.QLabel(text, parent)
    lbl.setAlignment(QtCore.Qt.AlignCenter)
    lbl.setStyleSheet(TITLE_QSS)
    return lbl


def _button(text: str, qss: str, parent: QtWidgets.QWidget, width: int = 180) -> QtWidgets.QPushButton:
    btn = QtWidgets.QPushButton(text, parent)
    btn.setStyleSheet(qss)
    btn.setFixedWidth(width)
    btn.setCursor(QtGui.QCursor(QtCore.Qt.PointingHandCursor))
    return btn


class IntroPage(QtWidgets.QWidget):
    welcome = QtCore.Signal()  # user tapped Welcome

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet(PAGE_QSS)
        lay = QtWidgets.QVBoxLayout(self)
        lay.addStretch(1)
        lay.addWidget(_title(WINDOW_TITLE, self))
        self.btn_welcome = _button("Welcome", WELCOME_QSS, self)
        self.btn_welcome.clicked.connect(self.welcome)
        lay.addWidget(self.btn_welcome, 0, QtCore.Qt.AlignHCenter)
        lay.addStretch(1)
        footer = QtWidgets.QLabel(APP_FOOTER, self)
        footer.setAlignment(QtCore.Qt.AlignCenter)
        footer.setStyleSheet("font-size: 16px; font-weight: 600; margin-bottom: 30px;")
        lay.addWidget(footer)


class MenuPage(QtWidgets.QWidget):
    exercise_chosen = QtCore.Signal(str)  # exercise key

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet(PAGE_QSS)
        self._lay = QtWidgets.QVBoxLayout(self)
        self._lay.addStretch(1)
        self._lay.addWidget(_title("Select Exercise", self))
        self._buttons: List[QtWidgets.QPushButton] = []
        self._tail = self._lay.count()  # buttons are inserted after the title
        self._lay.addStretch(1)

    def populate(self, items: List[Tuple[str, str, str]]):
        # items: (key, label, description) in menu order
        for b in self._buttons:
            self._lay.removeWidget(b); b.deleteLater()
        self._buttons = []
        for i, (key, label, desc) in enumerate(items):
            btn = _button(label, SELECT_QSS, self)
            btn.setToolTip(desc)
            btn.clicked.connect(lambda _checked=False, k=key: self.exercise_chosen.emit(k))
            self._lay.insertWidget(self._tail + i, btn, 0, QtCore.Qt.AlignHCenter)
            self._buttons.append(btn)

    def pick(self, idx: int) -> bool:
        # Press the idx-th button (number-key shortcuts); False when out of range
        if 0 <= idx < len(self._buttons):
            self._buttons[idx].click()
            return True
        return False


class LivePage(QtWidgets.QWidget):
    back = QtCore.Signal()  # user tapped ← Back

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet(PAGE_QSS)
        self.video_label = QtWidgets.QLabel("Starting camera…", self)
        self.video_label.setAlignment(QtCore.Qt.AlignCenter)
        self.video_label.setFixedSize(*FRAME_SIZE)
        self.video_label.setStyleSheet("color: #aaa; font-size: 16px;")

        self.btn_back = _button("← Back", BACK_QSS, self, width=100)
        self.btn_back.clicked.connect(self.back)

        top = QtWidgets.QHBoxLayout()
        top.addWidget(self.btn_back); top.addStretch(1)
        lay = QtWidgets.QVBoxLayout(self)
        lay.setContentsMargins(20, 20, 20, 20)
        lay.addLayout(top)
        lay.addStretch(1)
        lay.addWidget(self.video_label, 0, QtCore.Qt.AlignHCenter)
        lay.addStretch(1)

    def show_image(self, qimg: QtGui.QImage):
        self.video_label.setPixmap(QtGui.QPixmap.fromImage(qimg))

    def clear(self, text: str = "Starting camera…"):
        self.video_label.clear(); self.video_label.setText(text)


class DonePage(QtWidgets.QWidget):
    back_to_menu = QtCore.Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet(PAGE_QSS)
        lay = QtWidgets.QVBoxLayout(self)
        lay.addStretch(1)
        lay.addWidget(_title("Great Job!", self))
        self.btn_menu = _button("Back to Menu", RESET_QSS, self)
        self.btn_menu.clicked.connect(self.back_to_menu)
        lay.addWidget(self.btn_menu, 0, QtCore.Qt.AlignHCenter)
        lay.addStretch(1)
