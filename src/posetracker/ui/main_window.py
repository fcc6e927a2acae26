# src/posetracker/ui/main_window.py
import logging  # module logger
import time  # monotonic clock for FPS
from typing import Callable, Optional  # type hints for clarity
from PySide6 import QtCore, QtGui, QtWidgets  # Qt UI framework (signals, widgets, etc.)

# Global configuration values / constants and the detector option record
from ..config import WINDOW_TITLE, CAM_INDEX, DetectorOptions
# Exercise definitions (labels, descriptions, menu order)
from ..activities.activity_defs import menu_items
# Pose source: backend interface + default MediaPipe implementation
from ..backends.base import PoseBackend
# Threaded camera + inference loop
from ..camera.video_worker import VideoWorker
# Landmark parsing for overlays
from ..geometry.landmarks import to_landmarks
# Screen sequencer (calibration, countdown, counting, completion)
from ..session.flow import LIVE_SCREENS, Screen, SessionFlow
from .overlays import cvimg_to_qt, render_live  # drawing overlays on the frame
from .pages import IntroPage, MenuPage, LivePage, DonePage  # one widget per screen
from .qt_scheduler import QtScheduler  # QTimer-backed timers for the flow

logger = logging.getLogger(__name__)

now_mono = time.monotonic  # monotonic clock for stable timing (not affected by system clock)

STATUS_TEXT = {  # status-bar hint per screen
    Screen.INTRO: "Welcome. Press Enter to continue.",
    Screen.MENU: "Pick an exercise (keys 1-5).",
    Screen.CALIBRATION: "Step back until your shoulders and feet fit inside the box.",
    Screen.COUNTDOWN: "Get ready…",
    Screen.SESSION: "Go! Reps are counted automatically.",
    Screen.DONE: "Session complete.",
}


def _default_backend() -> PoseBackend:
    # Imported lazily so the window can be built (and tested) without the model on disk
    from ..backends.mediapipe_backend import MediaPipeBackend
    return MediaPipeBackend()


class MainWindow(QtWidgets.QMainWindow):  # main application window (central controller/orchestrator)
    def __init__(self, backend_factory: Callable[[], PoseBackend] = _default_backend,
                 options: DetectorOptions = DetectorOptions(), cam_index: int = CAM_INDEX):
        super().__init__()  # init base QMainWindow
        self.setWindowTitle(WINDOW_TITLE)  # set window title from config
        self.resize(options.width + 80, options.height + 140)  # room for the back button around the view
        self._backend_factory = backend_factory
        self._options = options  # tracked regions + display size, handed to each worker
        self._cam_index = cam_index
        self._t_prev_mono: Optional[float] = None  # previous frame time for FPS
        self._fps_meas = 0.0  # smoothed FPS

        self.worker: Optional[VideoWorker] = None  # VideoWorker instance (created per session)
        self.worker_thread: Optional[QtCore.QThread] = None  # QThread that hosts the worker

        self.scheduler = QtScheduler(self)  # timers live on the GUI thread
        self.flow = SessionFlow(self.scheduler)  # all screen / counting state
        self.build_ui()
        self.flow.add_listener(self._on_flow_changed)  # re-render on every state change
        self._on_flow_changed(self.flow)

    # ---------------- UI ----------------
    def build_ui(self):
        self.status = self.statusBar()  # system status bar at bottom
        self.model_indicator = QtWidgets.QLabel("Model: —")  # shows active backend label
        self.status.addPermanentWidget(self.model_indicator)  # stick it on the right side of the status bar

        self.stack = QtWidgets.QStackedWidget(self)
        self.page_intro = IntroPage(self); self.page_menu = MenuPage(self)
        self.page_live = LivePage(self); self.page_done = DonePage(self)
        for p in (self.page_intro, self.page_menu, self.page_live, self.page_done):
            self.stack.addWidget(p)
        self.setCentralWidget(self.stack)

        self.page_menu.populate(menu_items())
        self.page_intro.welcome.connect(self.flow.welcome)
        self.page_menu.exercise_chosen.connect(self.flow.start_exercise)
        self.page_live.back.connect(self.flow.back_to_menu)
        self.page_done.back_to_menu.connect(self.flow.finish)

        # keyboard shortcuts to drive the flow without a mouse
        QtGui.QShortcut(QtGui.QKeySequence(QtCore.Qt.Key_Escape), self, activated=self._shortcut_back)  # Esc = back
        QtGui.QShortcut(QtGui.QKeySequence(QtCore.Qt.Key_Return), self, activated=self._shortcut_confirm)  # Enter = Welcome / Back to Menu
        for key, idx in [("1",0),("2",1),("3",2),("4",3),("5",4)]:  # numeric keys pick an exercise on the menu
            QtGui.QShortcut(QtGui.QKeySequence(key), self, activated=lambda i=idx: self._shortcut_pick_exercise(i))

    def _page_for(self, screen: Screen) -> QtWidgets.QWidget:
        if screen is Screen.INTRO: return self.page_intro
        if screen is Screen.MENU: return self.page_menu
        if screen is Screen.DONE: return self.page_done
        return self.page_live  # calibration / countdown / session share the camera view

    def _on_flow_changed(self, flow: SessionFlow):
        page = self._page_for(flow.screen)
        if self.stack.currentWidget() is not page:
            self.stack.setCurrentWidget(page)
        self.status.showMessage(STATUS_TEXT.get(flow.screen, ""))

        # camera runs only on live screens, one worker per session generation
        if flow.screen in LIVE_SCREENS:
            if self.worker is None or self.worker.generation != flow.generation:
                self.on_stop(); self.on_start()
        elif self.worker is not None:
            self.on_stop()

    # ---------- lifecycle ----------
    def on_start(self):
        try:
            if self.worker_thread and self.worker_thread.isRunning(): return  # already running
            self.page_live.clear()
            self.worker_thread = QtCore.QThread(self)  # create thread container
            self.worker = VideoWorker(self._backend_factory, self._options,
                                      cam_index=self._cam_index, generation=self.flow.generation)  # options passed once per session
            self.worker.backend_changed.connect(self.on_backend_changed)  # update label when backend is ready
            self.worker.moveToThread(self.worker_thread)  # move worker to thread context
            self.worker.frame_ready.connect(self.on_frame)  # receive processed frame callbacks (queued)
            self.worker.error.connect(self.on_error)  # show errors
            self.worker.finished.connect(self.worker_thread.quit)  # loop exit ends the thread
            self.worker_thread.started.connect(self.worker.start)  # start worker when thread starts
            self.worker_thread.start()  # start the thread
            self._t_prev_mono = None
        except Exception as e:
            QtWidgets.QMessageBox.critical(self, "Start error", str(e)); raise  # report and re-raise

    def on_stop(self):
        try:
            if self.worker: self.worker.stop()  # stop backend + camera
            if self.worker_thread:
                self.worker_thread.quit(); self.worker_thread.wait()  # cleanly stop thread
        finally:
            if self.worker: self.worker.deleteLater()
            if self.worker_thread: self.worker_thread.deleteLater()
            self.worker = None; self.worker_thread = None
            self.model_indicator.setText("Model: —")

    @QtCore.Slot(str)
    def on_backend_changed(self, label: str):
        self.model_indicator.setText(f"Model: {label}")  # update status bar label

    # ---------- errors ----------
    def on_error(self, msg: str):
        logger.error("Pose source error: %s", msg)
        if self.flow.screen not in LIVE_SCREENS:
            return  # worker of a session the user already left
        self.on_stop()  # stop pipeline on error (safe state)
        if self.flow.screen in LIVE_SCREENS:
            self.flow.back_to_menu()
        QtWidgets.QMessageBox.critical(self, "Camera error", f"{msg}\n\nTip: set POSETRACKER_CAMERA to pick another camera index.")  # show error dialog

    # ---------- frame loop ----------
    def on_frame(self, frame_bgr, info):
        gen = info.get("generation")
        self.flow.handle_landmarks(info.get("landmarks"), gen)  # counting / calibration (drops stale generations itself)
        if gen != self.flow.generation or self.flow.screen not in LIVE_SCREENS:
            return  # late frame from a session the user already left

        tnow = info.get("t_mono") or now_mono()
        if self._t_prev_mono is not None and tnow > self._t_prev_mono:
            self._fps_meas = 0.2 * (1.0 / (tnow - self._t_prev_mono)) + 0.8 * self._fps_meas  # EMA smoothing of FPS
        self._t_prev_mono = tnow

        lms = to_landmarks(info.get("landmarks"))
        render_live(frame_bgr, lms, self.flow, self._options)
        self.page_live.show_image(cvimg_to_qt(frame_bgr))  # display frame in the live page
        self.model_indicator.setToolTip(f"FPS ~{self._fps_meas:.1f}")

    # ---------- shortcuts ----------
    def _shortcut_back(self):
        if self.flow.screen in LIVE_SCREENS: self.flow.back_to_menu()

    def _shortcut_confirm(self):
        if self.flow.screen is Screen.INTRO: self.flow.welcome()
        elif self.flow.screen is Screen.DONE: self.flow.finish()

    def _shortcut_pick_exercise(self, idx: int):
        if self.flow.screen is Screen.MENU: self.page_menu.pick(idx)

    def closeEvent(self, ev: QtGui.QCloseEvent) -> None:
        try:
            self.scheduler.cancel_all()  # no timer may fire into a closing window
            self.on_stop()  # stop camera/threads on close
        finally:
            super().closeEvent(ev)  # call base close
