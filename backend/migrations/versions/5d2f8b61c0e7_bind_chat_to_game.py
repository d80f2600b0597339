"""bind every chat to exactly one game

Revision ID: 5d2f8b61c0e7
Revises: 1a7c3e9d2b40
Create Date: 2025-07-20 18:02:11.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5d2f8b61c0e7'
down_revision = '1a7c3e9d2b40'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    cols = {c['name'] for c in insp.get_columns('chats')}
    if 'game_id' in cols:
        return
    # Chats created before this revision belong to no game and can't be kept
    op.execute('DELETE FROM chat_messages')
    op.execute('DELETE FROM chats')
    with op.batch_alter_table('chats') as batch_op:
        batch_op.add_column(sa.Column('game_id', sa.String(length=36), nullable=False))
        batch_op.create_foreign_key('fk_chats_game_id', 'games', ['game_id'], ['id'])
        batch_op.create_unique_constraint('uq_chats_game_id', ['game_id'])


def downgrade():
    with op.batch_alter_table('chats') as batch_op:
        batch_op.drop_constraint('uq_chats_game_id', type_='unique')
        batch_op.drop_constraint('fk_chats_game_id', type_='foreignkey')
        batch_op.drop_column('game_id')
