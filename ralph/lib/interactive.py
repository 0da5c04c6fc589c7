"""Terminal prompts for the setup commands. EOF answers with the default."""


def prompt(message: str, default: str = "") -> str:
    """Prompt user for input with optional default."""
    if default:
        display = f"{message} [{default}]: "
    else:
        display = f"{message}: "

    try:
        value = input(display).strip()
        return value if value else default
    except EOFError:
        return default


def prompt_choice(message: str, choices: list[str], default: int = 1) -> str:
    """Prompt user to select from numbered choices (default is 1-indexed)."""
    print(f"\n{message}")
    for i, choice in enumerate(choices, 1):
        marker = "*" if i == default else " "
        print(f"  {marker}{i}. {choice}")

    while True:
        try:
            selection = input(f"Select [1-{len(choices)}, default={default}]: ").strip()
            if not selection:
                return choices[default - 1]
            idx = int(selection)
            if 1 <= idx <= len(choices):
                return choices[idx - 1]
            print(f"Please enter a number between 1 and {len(choices)}")
        except ValueError:
            print("Please enter a valid number")
        except EOFError:
            return choices[default - 1]


def prompt_bool(message: str, default: bool = False) -> bool:
    """Prompt user for yes/no answer."""
    default_str = "Y/n" if default else "y/N"
    try:
        value = input(f"{message} [{default_str}]: ").strip().lower()
        if not value:
            return default
        return value in ("y", "yes", "true", "1")
    except EOFError:
        return default
