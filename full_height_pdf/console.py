"""Colour-coded console logging shared by the exporter and the terminal environment."""

from colorama import Fore, Style, init

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class ConsoleLogMixin:
    """Adds ``_log_*`` helpers. Set ``self.debug`` to enable debug output."""

    debug: bool = False

    def _log_debug(self, message: str) -> None:
        """Log debug message with color (only if debug mode is enabled)."""
        if self.debug:
            print(f"{Fore.CYAN}[DEBUG]{Style.RESET_ALL} {message}")

    def _log_info(self, message: str) -> None:
        """Log info message with color."""
        print(f"{Fore.GREEN}[INFO]{Style.RESET_ALL} {message}")

    def _log_warning(self, message: str) -> None:
        """Log warning message with color."""
        print(f"{Fore.YELLOW}[WARNING]{Style.RESET_ALL} {message}")

    def _log_error(self, message: str) -> None:
        """Log error message with color."""
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} {message}")

    def _log_success(self, message: str) -> None:
        """Log success message with color."""
        print(f"{Fore.GREEN}[OK]{Style.RESET_ALL} {message}")
