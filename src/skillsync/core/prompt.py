"""Interactive conflict resolution."""

from enum import Enum
from typing import Callable, Optional

from rich.markup import escape

from skillsync.utils.output import console, print_warning


class ConflictResolution(str, Enum):
    """Answer to a single conflict prompt."""

    YES = "yes"
    NO = "no"
    YES_ALL = "yes-all"
    NO_ALL = "no-all"


# Decision provider: skill name -> resolution
ConflictPrompter = Callable[[str], ConflictResolution]

_ANSWERS = {
    "yes": ConflictResolution.YES,
    "y": ConflictResolution.YES,
    "no": ConflictResolution.NO,
    "n": ConflictResolution.NO,
    "yes-all": ConflictResolution.YES_ALL,
    "yes all": ConflictResolution.YES_ALL,
    "ya": ConflictResolution.YES_ALL,
    "all": ConflictResolution.YES_ALL,
    "no-all": ConflictResolution.NO_ALL,
    "no all": ConflictResolution.NO_ALL,
    "na": ConflictResolution.NO_ALL,
    "none": ConflictResolution.NO_ALL,
}


def parse_resolution(answer: str) -> Optional[ConflictResolution]:
    """Normalize a typed answer.

    Args:
        answer: Raw user input

    Returns:
        The matching resolution, or None if the input is not recognized
    """
    return _ANSWERS.get(answer.strip().lower())


def prompt_conflict_resolution(skill_name: str) -> ConflictResolution:
    """Ask the user whether to overwrite a conflicting skill.

    Blocks until a line is read. Unrecognized input and end of input are
    treated as "no", so nothing is overwritten on an ambiguous answer.

    Args:
        skill_name: Name of the skill whose content differs

    Returns:
        The user's choice
    """
    console.print()
    console.print(
        f'[yellow]⚠[/yellow]  Skill "{escape(skill_name)}" already exists with different content.'
    )
    try:
        answer = console.input("Overwrite? (yes/no/yes-all/no-all): ")
    except EOFError:
        answer = ""

    resolution = parse_resolution(answer)
    if resolution is None:
        print_warning(f'Invalid input "{answer}", treating as "no"')
        return ConflictResolution.NO
    return resolution


def fixed_resolution(resolution: ConflictResolution) -> ConflictPrompter:
    """Build a prompter that always returns ``resolution`` without asking."""

    def prompt(skill_name: str) -> ConflictResolution:
        return resolution

    return prompt
