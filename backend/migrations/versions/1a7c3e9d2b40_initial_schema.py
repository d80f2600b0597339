"""initial schema: games, players, cards, claims, chats, chat_messages

Revision ID: 1a7c3e9d2b40
Revises:
Create Date: 2025-07-09 23:35:32.836000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a7c3e9d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'games',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('which_player_turn', sa.String(length=36), nullable=True),
        sa.Column('state', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('round_number', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('card_to_play', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_table(
        'players',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('seat', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('game_id', sa.String(length=36), sa.ForeignKey('games.id'), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('last_time_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
    )
    op.create_index('ix_players_game_id', 'players', ['game_id'])
    op.create_table(
        'claims',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('created_by', sa.String(length=36), sa.ForeignKey('players.id'), nullable=False),
        sa.Column('game_id', sa.String(length=36), sa.ForeignKey('games.id'), nullable=False),
        sa.Column('number_of_cards', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_claims_created_by', 'claims', ['created_by'])
    op.create_index('ix_claims_game_id', 'claims', ['game_id'])
    op.create_table(
        'cards',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('card_type', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('player_id', sa.String(length=36), sa.ForeignKey('players.id'), nullable=True),
        sa.Column('claim_id', sa.String(length=36), sa.ForeignKey('claims.id'), nullable=True),
    )
    op.create_index('ix_cards_player_id', 'cards', ['player_id'])
    op.create_index('ix_cards_claim_id', 'cards', ['claim_id'])
    op.create_table(
        'chats',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('number_of_messages', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_table(
        'chat_messages',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('seq', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('player_id', sa.String(length=36), sa.ForeignKey('players.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('chat_id', sa.String(length=36), sa.ForeignKey('chats.id'), nullable=False),
    )
    op.create_index('ix_chat_messages_chat_id', 'chat_messages', ['chat_id'])


def downgrade():
    op.drop_index('ix_chat_messages_chat_id', table_name='chat_messages')
    op.drop_table('chat_messages')
    op.drop_table('chats')
    op.drop_index('ix_cards_claim_id', table_name='cards')
    op.drop_index('ix_cards_player_id', table_name='cards')
    op.drop_table('cards')
    op.drop_index('ix_claims_game_id', table_name='claims')
    op.drop_index('ix_claims_created_by', table_name='claims')
    op.drop_table('claims')
    op.drop_index('ix_players_game_id', table_name='players')
    op.drop_table('players')
    op.drop_table('games')
