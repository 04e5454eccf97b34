"""Runtime dependency checks and the Chromium installer."""

import importlib
import subprocess
import sys
from typing import List, Tuple

from colorama import Fore, Style

# (import name, pip name)
REQUIRED_MODULES: List[Tuple[str, str]] = [
    ("playwright", "playwright"),
    ("markdown_it", "markdown-it-py"),
    ("mdit_py_plugins", "mdit-py-plugins"),
    ("latex2mathml", "latex2mathml"),
    ("chardet", "chardet"),
    ("colorama", "colorama"),
    ("tqdm", "tqdm"),
]


def run_command(cmd: List[str], description: str) -> bool:
    """Run a command and return success status."""
    print(f"Installing {description}...")
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
        print(f"{Fore.GREEN}✓{Style.RESET_ALL} {description} installed successfully")
        return True
    except subprocess.CalledProcessError as e:
        print(f"{Fore.RED}✗{Style.RESET_ALL} Failed to install {description}: {e.stderr}")
        return False


def check_module(module_name: str, pip_name: str) -> bool:
    """Check if a Python module can be imported."""
    try:
        importlib.import_module(module_name)
        print(f"{Fore.GREEN}✓{Style.RESET_ALL} {pip_name} is available")
        return True
    except ImportError:
        print(f"{Fore.RED}✗{Style.RESET_ALL} Error: {pip_name} is required but not found.")
        print(f"Run: pip install {pip_name}")
        return False


def check_dependencies(verbose: bool = True) -> bool:
    """Return True when every required module imports.

    With ``verbose`` off only the missing modules are reported.
    """
    missing = []
    for module_name, pip_name in REQUIRED_MODULES:
        if verbose:
            if not check_module(module_name, pip_name):
                missing.append(pip_name)
            continue
        try:
            importlib.import_module(module_name)
        except ImportError:
            print(f"{Fore.RED}✗{Style.RESET_ALL} Error: {pip_name} is required but not found.")
            missing.append(pip_name)
    return not missing


def install_browser() -> bool:
    """Download the Chromium build Playwright drives."""
    return run_command([sys.executable, "-m", "playwright", "install", "chromium"], "Playwright Chromium")
