from luelue.dto import StatusUpdate, StatusUpdateRequest
from luelue.errors import DatabaseQueryError


def build_status_update(request: StatusUpdateRequest, game_repo, player_repo) -> StatusUpdate:
    """Snapshot of a game as seen by one player.

    A player that doesn't exist or sits at another table is reported as
    excluded and gets no player data.
    """
    game = game_repo.get_game_by_id(request.game_id)
    try:
        player = player_repo.get_player(request.player_id)
    except DatabaseQueryError as exc:
        if exc.status_code != 404:
            raise
        player = None

    excluded = player is None or player.game_id != game.id
    return StatusUpdate(
        game_data=game.to_dict(),
        player_data=None if excluded else player.to_dict(),
        player_excluded_from_game=excluded,
    )
