from enum import Enum


class ChangeOperation(str, Enum):
    ADD = "add"
    MODIFY = "modify"
    REMOVE = "remove"
