from __future__ import annotations


class GameError(Exception):
    """Base for errors reported privately to the requester.

    Raising one means nothing was mutated.
    """

    code = "game_error"
    message = "Request rejected"

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"error": self.code, "message": self.message}


class InvalidConfig(GameError):
    code = "invalid_config"
    message = "Invalid room configuration"


class RoomNotFound(GameError):
    code = "room_not_found"
    message = "Room not found"


class RoomFull(GameError):
    code = "room_full"
    message = "Room is full"


class NameTaken(GameError):
    code = "name_taken"
    message = "Player name already taken"


class InvalidName(GameError):
    code = "invalid_name"
    message = "Invalid player name"


class NotInRoom(GameError):
    code = "not_in_room"
    message = "You are not in this room"


class NotHost(GameError):
    code = "only_host"
    message = "Only the host can start the game"


class NotEnoughPlayers(GameError):
    code = "not_enough_players"
    message = "Need at least 2 players to start"


class InvalidState(GameError):
    code = "invalid_state"
    message = "Action not allowed right now"


class NotYourTurn(GameError):
    code = "not_your_turn"
    message = "Not your turn to submit a word"


class WordTooShort(GameError):
    code = "word_too_short"
    message = "Word must be at least 3 letters long"


class WordNotScramblable(GameError):
    code = "word_not_scramblable"
    message = "Word needs at least two different letters"


class OwnWord(GameError):
    code = "own_word"
    message = "You cannot guess your own word"


class AlreadyGuessed(GameError):
    code = "already_guessed"
    message = "You already guessed this word"
