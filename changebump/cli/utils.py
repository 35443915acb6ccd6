"""CLI Utility Functions"""

from changebump.git import BumpType
from changebump.output import bold, dim, info, colorize_bump


def _format_option(bump_type: BumpType, option_num: int, recommended: BumpType) -> str:
    line = f"{info(f'[{option_num}]')} {colorize_bump(str(bump_type))} {dim('-')} {bump_type.label}"
    if bump_type == recommended:
        line += f" {dim('(recommended)')}"
    return line


def select_bump_type(recommended: BumpType) -> BumpType | None:
    """Ask which bump to apply. Enter picks the recommendation; q cancels."""
    options = [BumpType.PATCH, BumpType.MINOR, BumpType.MAJOR]

    print()
    print(bold("Confirm the version bump type:"))
    for i, option in enumerate(options, 1):
        print(f"  {_format_option(option, i, recommended)}")
    print()

    while True:
        try:
            choice = input(f"Select [1-{len(options)}] (Enter for {recommended}) or (q)uit: ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            return None
        if choice == '':
            return recommended
        if choice == 'q':
            return None
        if choice in ('patch', 'minor', 'major'):
            return BumpType.from_name(choice)
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            return options[int(choice) - 1]
        print(f"Enter 1-{len(options)}, a bump name, or q")


def confirm(message: str, default: bool = True) -> bool:
    """Yes/no question. Interrupts count as no."""
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{message} {dim(suffix)} ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        return False
    if not answer:
        return default
    return answer in ('y', 'yes')
