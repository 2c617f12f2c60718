"""devprofile modules - Self-contained bricks following the brick philosophy

Each module is a self-contained component with clear contracts:
- Package Installer: Install Homebrew taps, packages and casks
- Shell Config: Generate .zshrc and the antidote plugin manifest
- 1Password Config: Generate the SSH agent configuration and socket link
- File Placement: Copy profile files into the home directory
- Starship Config: Generate starship.toml
- Git Config: Ensure a git identity and apply global git settings
- Interaction Handler: Ask the operator for missing input
- Progress Display: Show run progress
"""

from . import (
    atomic_write,
    file_placement,
    git_config,
    interaction_handler,
    onepassword_config,
    package_installer,
    progress,
    shell_config,
    starship_config,
    subprocess_helper,
)

__all__ = [
    "atomic_write",
    "file_placement",
    "git_config",
    "interaction_handler",
    "onepassword_config",
    "package_installer",
    "progress",
    "shell_config",
    "starship_config",
    "subprocess_helper",
]
