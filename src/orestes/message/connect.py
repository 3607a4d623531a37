"""The bootstrap call that opens a session and reports server capabilities."""

from orestes.message.message import Message

CONNECT_PATH = "/connect"

Connect = Message.create(method="GET", path=CONNECT_PATH, status=[200, 304], name="Connect")
