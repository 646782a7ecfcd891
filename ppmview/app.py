import customtkinter as ctk

from ppmview.controllers.app_controller import AppController
from ppmview.models.image_model import ImageData
from ppmview.services.image_service import ImageService
from ppmview.ui.bottom_bar import BottomBar
from ppmview.ui.image_viewer import ImageViewer
from ppmview.ui.sidebar import Sidebar

MIN_WIDTH = 640
MIN_HEIGHT = 480


class PpmViewerApp(ctk.CTk):
    def __init__(self, image_data: ImageData, image_service: ImageService) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title(image_data.pixmap.title)
        self.minsize(MIN_WIDTH, MIN_HEIGHT)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer,
            sidebar=self._sidebar,
            bottom=self._bottom,
            window=self,
            image_service=image_service,
        )
        self._controller.bind_events()
        # fit once the canvas has its real size
        self.after_idle(self._controller.show_image, image_data)
