"""Interactive dmenu front end: create, apply and remove layouts."""

import logging
from enum import Enum
from typing import Optional

from ..models.labels import LabelRegistry
from ..models.settings import SlamSettings
from .builder import LayoutBuilder
from .config import LayoutConfig, strip_marker
from .dmenu import Dmenu, Message
from .xrandr import Xrandr

logger = logging.getLogger(__name__)


class StartOption(Enum):
    APPLY_LAYOUT = "apply"
    REMOVE_LAYOUT = "remove"
    NEW_LAYOUT = "new"
    EXIT = "exit"


START_OPTION_LABELS = LabelRegistry("start option", StartOption, {
    StartOption.APPLY_LAYOUT: "Apply Layout",
    StartOption.REMOVE_LAYOUT: "Remove Layout",
    StartOption.NEW_LAYOUT: "New Layout",
    StartOption.EXIT: "Exit",
})


class SlamApp:
    """Main menu loop.

    Runs until the user picks Exit or applies a layout. Dismissing any menu
    raises EmptyPickerOutputError out of run().
    """

    def __init__(self, config: LayoutConfig, dmenu: Dmenu, xrandr: Xrandr):
        self.config = config
        self.dmenu = dmenu
        self.xrandr = xrandr
        self.builder = LayoutBuilder(dmenu, xrandr, config)

    @classmethod
    def from_settings(cls, settings: SlamSettings) -> "SlamApp":
        return cls(
            config=LayoutConfig.load(settings.config_path),
            dmenu=Dmenu(settings.dmenu_path),
            xrandr=Xrandr(settings.xrandr_path),
        )

    def run(self) -> None:
        while self.start():
            pass

    def start(self) -> bool:
        """Show the main menu once.

        Returns:
            True if the main menu should be shown again
        """
        option = self.choose_start_option()
        logger.debug(f"Start option: {option.name}")

        if option is StartOption.NEW_LAYOUT:
            self.builder.create_layout()
            return True
        if option is StartOption.REMOVE_LAYOUT:
            self.remove_layout()
            return True
        if option is StartOption.APPLY_LAYOUT:
            self.apply_layout()
        return False

    def choose_start_option(self) -> StartOption:
        label = self.dmenu.choose(Message(START_OPTION_LABELS.labels(), "Choose an option:"))
        return START_OPTION_LABELS.member_of(label)

    def choose_layout(self) -> Optional[str]:
        """Pick an existing layout, or offer to create the first one.

        Returns:
            Layout name, or None when the catalog was empty
        """
        if self.config.is_empty():
            if self.dmenu.confirm("You don't have any layouts yet. Create one?"):
                self.builder.create_layout()
            return None

        label = self.dmenu.choose(Message(self.config.layout_names(), "Choose layout:"))
        return strip_marker(label)

    def apply_layout(self) -> None:
        layout_name = self.choose_layout()
        if layout_name is not None:
            self.config.apply(layout_name, self.xrandr)

    def remove_layout(self) -> None:
        layout_name = self.choose_layout()
        if layout_name is None:
            return
        if self.dmenu.confirm(
            f"Do you really want to remove '{layout_name}' layout? This operation will be irreversible!"
        ):
            self.config.remove(layout_name)
