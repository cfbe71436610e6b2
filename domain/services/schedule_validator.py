"""
Schedule validation and statistics.

Validation separates hard issues (the schedule is unusable) from warnings
(quality concerns that do not invalidate it). Both are returned as data.
"""

from dataclasses import dataclass, field

from config import INTER_MATCH_BUFFER_MINUTES
from domain.models.match import GameSettings, Match
from domain.models.team import Team


@dataclass
class ScheduleValidation:
    """Result of validate_schedule."""

    is_valid: bool
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ScheduleStats:
    """Aggregate numbers for reporting a schedule."""

    total_games: int
    games_per_team: dict[str, int]
    average_games_per_team: float
    back_to_back_games: int
    unique_matchups: int
    estimated_duration: int  # minutes, including inter-match buffers


def _in_play_order(matches: list[Match]) -> list[Match]:
    return sorted(matches, key=lambda m: m.game_number)


def _count_games(matches: list[Match], teams: list[Team]) -> dict[str, int]:
    counts = {team.id: 0 for team in teams}
    for match in matches:
        counts[match.team_a_id] = counts.get(match.team_a_id, 0) + 1
        counts[match.team_b_id] = counts.get(match.team_b_id, 0) + 1
    return counts


def validate_schedule(
    matches: list[Match],
    teams: list[Team],
    settings: GameSettings,
) -> ScheduleValidation:
    """
    Check a schedule for integrity issues and quality warnings.

    Issues: empty schedule, unknown team ids, a team playing itself.
    Warnings: gaps in game numbering, back-to-back games, uneven game counts,
    teams over the games-per-team setting.

    Args:
        matches: Schedule to check (not mutated)
        teams: Teams the schedule refers to
        settings: Session settings (games_per_team is the ceiling)

    Returns:
        ScheduleValidation; is_valid is True iff there are no issues
    """
    issues: list[str] = []
    warnings: list[str] = []

    if not matches:
        issues.append("No matches scheduled")
        return ScheduleValidation(is_valid=False, issues=issues, warnings=warnings)

    teams_by_id = {team.id: team for team in teams}
    for match in matches:
        if match.team_a_id not in teams_by_id:
            issues.append(f"Match {match.game_number}: Invalid team A ID")
        if match.team_b_id not in teams_by_id:
            issues.append(f"Match {match.game_number}: Invalid team B ID")
        if match.team_a_id == match.team_b_id:
            issues.append(f"Match {match.game_number}: Team cannot play itself")

    game_numbers = sorted(m.game_number for m in matches)
    if game_numbers != list(range(1, len(game_numbers) + 1)):
        warnings.append("Game numbering is not sequential")

    last_game: dict[str, int] = {}
    for match in _in_play_order(matches):
        for team_id in match.team_ids:
            previous = last_game.get(team_id)
            if previous is not None and match.game_number - previous == 1:
                team = teams_by_id.get(team_id)
                label = team.name if team else team_id
                warnings.append(f"{label} has back-to-back games ({previous} and {match.game_number})")
        for team_id in match.team_ids:
            last_game[team_id] = match.game_number

    game_counts = list(_count_games(matches, teams).values())
    min_games = min(game_counts)
    max_games = max(game_counts)
    if max_games - min_games > 1:
        warnings.append(f"Uneven games per team ({min_games}-{max_games})")
    if max_games > settings.games_per_team:
        warnings.append(
            f"Some teams exceed maximum games per team ({max_games} > {settings.games_per_team})"
        )

    return ScheduleValidation(is_valid=not issues, issues=issues, warnings=warnings)


def get_schedule_stats(
    matches: list[Match],
    teams: list[Team],
    buffer_minutes: int = INTER_MATCH_BUFFER_MINUTES,
) -> ScheduleStats:
    """
    Aggregate a schedule for display.

    Estimated duration is the sum of match durations plus a fixed buffer
    between consecutive matches.
    """
    games_per_team = _count_games(matches, teams)

    back_to_back = 0
    last_game: dict[str, int] = {}
    for match in _in_play_order(matches):
        for team_id in match.team_ids:
            previous = last_game.get(team_id)
            if previous is not None and match.game_number - previous == 1:
                back_to_back += 1
        for team_id in match.team_ids:
            last_game[team_id] = match.game_number

    unique_matchups = {match.pairing_key for match in matches}

    counts = list(games_per_team.values())
    average = sum(counts) / len(counts) if counts else 0.0

    estimated_duration = 0
    if matches:
        estimated_duration = sum(m.duration for m in matches) + buffer_minutes * (len(matches) - 1)

    return ScheduleStats(
        total_games=len(matches),
        games_per_team=games_per_team,
        average_games_per_team=average,
        back_to_back_games=back_to_back,
        unique_matchups=len(unique_matchups),
        estimated_duration=estimated_duration,
    )
