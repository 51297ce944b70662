from enum import IntEnum, unique

@unique
class Rank(IntEnum):
    ANONYMOUS = 0
    USER = 1
    BOT = 2

    @classmethod
    def from_allusers(cls, name, allusers):
        if allusers and allusers[0].get("name") == name:
            return cls.BOT
        return cls.USER

class User:
    def __init__(self, name, rank):
        self.name = name
        self.rank = rank

    @property
    def anonymous(self):
        return self.rank == Rank.ANONYMOUS

    @property
    def bot(self):
        return self.rank >= Rank.BOT

    def __eq__(self, user):
        return isinstance(user, User) and self.name == user.name

    def __hash__(self):
        return hash(self.name)

    def __str__(self):
        return "[anon]" if self.anonymous else self.name

ANONYMOUS = User(None, Rank.ANONYMOUS)
