"""
League table computed from completed matches.
"""

from config import POINTS_FOR_DRAW, POINTS_FOR_LOSS, POINTS_FOR_WIN
from domain.models.match import Match, Standing
from domain.models.team import Team


def calculate_standings(matches: list[Match], teams: list[Team]) -> list[Standing]:
    """
    Build standings for every team.

    Only completed matches count. Rows are ordered by points, then goal
    difference, then goals scored.

    Args:
        matches: All matches in the session
        teams: Teams to rank

    Returns:
        One Standing per team, best first
    """
    standings = {team.id: Standing(team_id=team.id) for team in teams}

    for match in matches:
        if not match.is_completed:
            continue
        team_a = standings.get(match.team_a_id)
        team_b = standings.get(match.team_b_id)
        if team_a is None or team_b is None:
            continue

        team_a.played += 1
        team_b.played += 1
        team_a.goals_for += match.score_a
        team_a.goals_against += match.score_b
        team_b.goals_for += match.score_b
        team_b.goals_against += match.score_a

        if match.score_a > match.score_b:
            winner, loser = team_a, team_b
        elif match.score_b > match.score_a:
            winner, loser = team_b, team_a
        else:
            winner = loser = None

        if winner is None:
            team_a.drawn += 1
            team_b.drawn += 1
            team_a.points += POINTS_FOR_DRAW
            team_b.points += POINTS_FOR_DRAW
        else:
            winner.won += 1
            winner.points += POINTS_FOR_WIN
            loser.lost += 1
            loser.points += POINTS_FOR_LOSS

    for standing in standings.values():
        standing.goal_difference = standing.goals_for - standing.goals_against

    return sorted(
        standings.values(),
        key=lambda s: (s.points, s.goal_difference, s.goals_for),
        reverse=True,
    )
