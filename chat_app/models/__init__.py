from chat_app.models.user import User
from chat_app.models.chat import Chat, ChatType
from chat_app.models.chat_member import ChatMember
from chat_app.models.message import Message

# This makes the models directory a Python package and ensures all models are loaded
