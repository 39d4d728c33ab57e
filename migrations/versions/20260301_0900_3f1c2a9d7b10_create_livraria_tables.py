"""create livraria tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-03-01 09:00:12.401233

"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Cria usuários, roles, associação usuário-role e livros."""
    op.create_table('tb_role',
        sa.Column('role_id', sa.Uuid(), nullable=False),
        sa.Column('role_nome', sa.String(length=30), nullable=False),
        sa.PrimaryKeyConstraint('role_id'),
        sa.UniqueConstraint('role_nome', name='uq_tb_role_role_nome')
    )

    op.create_table('tb_usuario',
        sa.Column('usuario_id', sa.Uuid(), nullable=False),
        sa.Column('nome', sa.String(length=150), nullable=False),
        sa.Column('senha', sa.String(length=255), nullable=False),
        sa.Column('status_usuario', sa.String(length=20), nullable=False),
        sa.Column('perfil_usuario', sa.String(length=20), nullable=False),
        sa.Column('data_criacao', sa.DateTime(timezone=True), nullable=False),
        sa.Column('data_atualizacao', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('usuario_id'),
        sa.UniqueConstraint('senha', name='uq_tb_usuario_senha')
    )
    op.create_index('ix_tb_usuario_nome', 'tb_usuario', ['nome'], unique=True)

    op.create_table('tb_usuario_role',
        sa.Column('usuario_id', sa.Uuid(), nullable=False),
        sa.Column('role_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['usuario_id'], ['tb_usuario.usuario_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['tb_role.role_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('usuario_id', 'role_id')
    )

    op.create_table('tb_livro',
        sa.Column('livro_id', sa.Uuid(), nullable=False),
        sa.Column('isbn', sa.String(length=100), nullable=False),
        sa.Column('titulo', sa.String(length=255), nullable=False),
        sa.Column('subtitulo', sa.String(length=255), nullable=True),
        sa.Column('valor', sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column('quantidade', sa.Integer(), nullable=True),
        sa.Column('status_livro', sa.String(length=20), nullable=False),
        sa.Column('categoria', sa.String(length=30), nullable=True),
        sa.Column('tipo_capa', sa.String(length=20), nullable=True),
        sa.Column('formato', sa.String(length=20), nullable=False),
        sa.Column('data_publicacao', sa.String(length=50), nullable=True),
        sa.Column('numero_paginas', sa.Integer(), nullable=True),
        sa.Column('capa_url', sa.String(length=500), nullable=True),
        sa.Column('autor', sa.String(length=255), nullable=True),
        sa.Column('editora', sa.String(length=255), nullable=True),
        sa.Column('data_cadastro', sa.DateTime(timezone=True), nullable=False),
        sa.Column('data_atualizacao', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('livro_id')
    )
    op.create_index('ix_tb_livro_isbn', 'tb_livro', ['isbn'], unique=True)
    op.create_index('ix_tb_livro_titulo', 'tb_livro', ['titulo'], unique=True)
    op.create_index('ix_tb_livro_data_cadastro', 'tb_livro', ['data_cadastro'], unique=False)

    # Roles de referência
    tb_role = sa.table('tb_role',
        sa.column('role_id', sa.Uuid()),
        sa.column('role_nome', sa.String(length=30)),
    )
    op.bulk_insert(tb_role, [
        {'role_id': uuid.uuid4(), 'role_nome': 'ROLE_USUARIO'},
        {'role_id': uuid.uuid4(), 'role_nome': 'ROLE_ADMIN'},
    ])


def downgrade() -> None:
    """Remove as tabelas da livraria."""
    op.drop_index('ix_tb_livro_data_cadastro', table_name='tb_livro')
    op.drop_index('ix_tb_livro_titulo', table_name='tb_livro')
    op.drop_index('ix_tb_livro_isbn', table_name='tb_livro')
    op.drop_table('tb_livro')
    op.drop_table('tb_usuario_role')
    op.drop_index('ix_tb_usuario_nome', table_name='tb_usuario')
    op.drop_table('tb_usuario')
    op.drop_table('tb_role')
