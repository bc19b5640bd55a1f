class XwobaMatchupsError(Exception):
    """Base class for exceptions raised inside the matchup pipeline."""


class ScheduleUnavailableError(XwobaMatchupsError):
    def __init__(self, game_date: str, cause: Exception) -> None:
        self.game_date = game_date
        self.cause = cause
        super().__init__(f"Schedule for {game_date} unavailable: {cause}")
