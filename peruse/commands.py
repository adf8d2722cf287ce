"""Command pattern implementation for pager key bindings."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .pager import Pager
    from .keyboard import KeyEvent
    from .view import DocumentView


class PagerCommand(ABC):
    """Base class for pager commands."""

    @abstractmethod
    def execute(self, pager: 'Pager', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            pager: Pager instance
            key_event: The key event that triggered this command
        """
        pass


class NavigationCommand(PagerCommand):
    """Base class for commands that move whichever view is active."""

    def execute(self, pager: 'Pager', key_event: 'KeyEvent') -> None:
        self._move(pager.active_view)

    @abstractmethod
    def _move(self, view: 'DocumentView'):
        """Perform the movement."""
        pass


class PanLeftCommand(NavigationCommand):
    def _move(self, view):
        view.pan_left()


class PanRightCommand(NavigationCommand):
    def _move(self, view):
        view.pan_right()


class ScrollDownCommand(NavigationCommand):
    def _move(self, view):
        view.scroll_down()


class ScrollUpCommand(NavigationCommand):
    def _move(self, view):
        view.scroll_up()


class NextPageCommand(NavigationCommand):
    def _move(self, view):
        view.next_page()


class PrevPageCommand(NavigationCommand):
    def _move(self, view):
        view.prev_page()


class QuitCommand(PagerCommand):
    """Close the help screen if it is shown, otherwise quit."""

    def execute(self, pager, key_event):
        if pager.help_visible:
            pager.hide_help()
        else:
            pager.quit()


class HelpCommand(PagerCommand):
    def execute(self, pager, key_event):
        pager.show_help()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], PagerCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # vi-style movement
        self.register((KeyType.REGULAR, 'h'), PanLeftCommand())
        self.register((KeyType.REGULAR, 'l'), PanRightCommand())
        self.register((KeyType.REGULAR, 'j'), ScrollDownCommand())
        self.register((KeyType.REGULAR, 'k'), ScrollUpCommand())

        # Paging
        self.register((KeyType.REGULAR, ' '), NextPageCommand())
        self.register((KeyType.SPECIAL, 'page_down'), NextPageCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PrevPageCommand())

        # System commands
        self.register((KeyType.REGULAR, 'q'), QuitCommand())
        self.register((KeyType.REGULAR, 'Q'), QuitCommand())
        self.register((KeyType.REGULAR, '?'), HelpCommand())

    def register(self, key: Tuple[KeyType, str], command: PagerCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[PagerCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, pager: 'Pager', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if a command was bound to the key; unbound keys are ignored
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return False
        command.execute(pager, key_event)
        return True
