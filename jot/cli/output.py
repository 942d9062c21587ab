"""CLI output utilities and formatting."""

from datetime import datetime, timedelta, timezone

from colorama import Fore, Style

BANNER = f"""
{Fore.CYAN}{Style.BRIGHT}     _       _   {Style.RESET_ALL}
{Fore.CYAN}{Style.BRIGHT}    (_) ___ | |_ {Style.RESET_ALL}
{Fore.CYAN}{Style.BRIGHT}    | |/ _ \\| __|{Style.RESET_ALL}
{Fore.CYAN}{Style.BRIGHT}    | | (_) | |_ {Style.RESET_ALL}
{Fore.CYAN}{Style.BRIGHT}   _/ |\\___/ \\__|{Style.RESET_ALL}
{Fore.CYAN}{Style.BRIGHT}  |__/           {Style.RESET_ALL}
  {Fore.WHITE}{Style.BRIGHT}Snapshots of your working tree{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def parse_timezone(offset: str) -> timezone:
    """Turn a +HHMM / -HHMM offset into a tzinfo. Unparseable offsets mean UTC."""
    if len(offset) != 5 or offset[0] not in '+-' or not offset[1:].isdigit():
        return timezone.utc
    sign = -1 if offset[0] == '-' else 1
    delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[3:5]))
    return timezone(sign * delta)


def format_timestamp(timestamp: int, offset: str = '+0000') -> str:
    """Format Unix timestamp in its recorded timezone."""
    dt = datetime.fromtimestamp(int(timestamp), parse_timezone(offset))
    return dt.strftime("%a %b %d %H:%M:%S %Y ") + offset


def format_commit(commit) -> str:
    """Render one commit the way log, global-log and find list it."""
    lines = [
        f"{Fore.YELLOW}==={Style.RESET_ALL}",
        f"{Fore.YELLOW}commit {commit.hash}{Style.RESET_ALL}",
        f"Date: {format_timestamp(commit.timestamp, commit.timezone)}",
        commit.message,
        '',
    ]
    return '\n'.join(lines)
