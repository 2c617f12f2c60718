"""devprofile - declarative workstation provisioning from profiles

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- Regenerate, never patch (every run converges to the profile)
- Fail fast with helpful guidance

The devprofile CLI reads a named profile, validates it, installs its Homebrew
taps/packages/casks and regenerates the shell, 1Password SSH agent, starship
and git configuration it describes.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
