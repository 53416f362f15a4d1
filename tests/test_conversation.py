"""
Tests for the chat projection with members and last message
"""
from chat_app.crud import chat as chat_crud
from chat_app.crud import message as message_crud
from chat_app.models.chat import Chat, ChatType
from chat_app.models.user import User
from chat_app.services.conversation import assemble, assemble_for_user, get_unread_count


def test_assemble_fresh_chat_has_only_the_creator(db, alice):
    chat = chat_crud.create_chat(db, ChatType.GROUP, "Team", alice.id)

    assembled = assemble(db, chat.id)

    assert assembled.id == chat.id
    assert [m.user_id for m in assembled.members] == [alice.id]
    assert assembled.members[0].user.username == "alice"
    assert assembled.last_message is None
    assert assembled.unread_count == 0


def test_assemble_unknown_chat(db):
    assert assemble(db, 123) is None


def test_last_message_is_the_newest(db, alice, bob):
    chat = chat_crud.create_chat(db, ChatType.GROUP, "Team", alice.id, member_ids=[bob.id])
    message_crud.create_message(db, chat.id, alice.id, "hi")
    message_crud.create_message(db, chat.id, bob.id, "hey")

    assembled = assemble(db, chat.id)

    assert assembled.last_message.content == "hey"
    assert assembled.last_message.sender.id == bob.id


def test_no_last_message_when_newest_sender_is_gone(db, alice, bob):
    chat = chat_crud.create_chat(db, ChatType.GROUP, "Team", alice.id, member_ids=[bob.id])
    message_crud.create_message(db, chat.id, alice.id, "old")
    message_crud.create_message(db, chat.id, bob.id, "new")
    db.query(User).filter(User.id == bob.id).delete()
    db.commit()

    assembled = assemble(db, chat.id)

    assert assembled.last_message is None
    assert [m.user_id for m in assembled.members] == [alice.id]


def test_unread_count_is_always_zero(db, alice, bob):
    """Read receipts are not tracked, so the count stays at 0 even with messages"""
    chat = chat_crud.create_chat(db, ChatType.GROUP, "Team", alice.id, member_ids=[bob.id])
    message_crud.create_message(db, chat.id, alice.id, "unseen")

    assert get_unread_count(db, chat.id, bob.id) == 0
    assert assemble(db, chat.id, bob.id).unread_count == 0


def test_assemble_for_user_lists_every_chat(db, alice, bob):
    team = chat_crud.create_chat(db, ChatType.GROUP, "Team", alice.id, member_ids=[bob.id])
    solo = chat_crud.create_chat(db, ChatType.GROUP, "Solo", alice.id)

    assert [c.id for c in assemble_for_user(db, alice.id)] == [team.id, solo.id]
    assert [c.id for c in assemble_for_user(db, bob.id)] == [team.id]
    assert assemble_for_user(db, 999) == []


def test_assemble_for_user_skips_removed_chats(db, alice):
    """A membership left behind by a deleted chat does not break the listing"""
    gone = chat_crud.create_chat(db, ChatType.GROUP, "Gone", alice.id)
    kept = chat_crud.create_chat(db, ChatType.GROUP, "Kept", alice.id)
    db.query(Chat).filter(Chat.id == gone.id).delete()
    db.commit()

    assert [c.id for c in assemble_for_user(db, alice.id)] == [kept.id]
