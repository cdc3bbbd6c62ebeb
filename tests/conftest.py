"""
Pytest configuration and shared fixtures.
"""

import pytest

from matchmaking.matching.schema import Profile


def make_profile(**overrides) -> Profile:
    """Minimal profile with every optional field empty."""
    data = {
        "id": "user-default",
        "what_i_sell": "",
        "what_i_need": "",
        "partnership_interests": [],
        "tags": [],
    }
    data.update(overrides)
    return Profile(**data)


@pytest.fixture
def joao() -> Profile:
    """Software vendor looking for distribution partners."""
    return make_profile(
        id="user-001",
        name="João Silva",
        role="MEMBER",
        what_i_sell="Software de gestão empresarial para PMEs",
        what_i_need="Parceiros de distribuição no Nordeste",
        partnership_interests=["Tecnologia", "SaaS"],
        tags=["Empreendedorismo", "Vendas"],
    )


@pytest.fixture
def maria() -> Profile:
    """Consultant who needs technology and software clients."""
    return make_profile(
        id="user-002",
        name="Maria Santos",
        role="MEMBER",
        what_i_sell="Consultoria em expansão de negócios",
        what_i_need="Clientes no setor de tecnologia e software",
        partnership_interests=["Tecnologia", "Consultoria"],
        tags=["Networking", "Vendas"],
    )


@pytest.fixture
def pedro() -> Profile:
    """Organic producer with nothing in common with joao."""
    return make_profile(
        id="user-003",
        name="Pedro Costa",
        role="MEMBER",
        what_i_sell="Frutas orgânicas direto do produtor",
        what_i_need="Restaurantes e mercados premium",
        partnership_interests=["Alimentação", "Saúde"],
        tags=["Sustentabilidade", "Agro"],
    )


@pytest.fixture
def mirror_of_joao(joao) -> Profile:
    """Sells exactly what joao needs, needs exactly what joao sells."""
    return make_profile(
        id="user-mirror",
        what_i_sell=joao.what_i_need,
        what_i_need=joao.what_i_sell,
        partnership_interests=list(joao.partnership_interests),
        tags=list(joao.tags),
    )


@pytest.fixture
def profiles_csv(tmp_path):
    """Small CSV profile export."""
    path = tmp_path / "profiles.csv"
    path.write_text(
        "id,name,role,what_i_sell,what_i_need,partnership_interests,tags\n"
        "user-001,João,MEMBER,Software de gestão empresarial para PMEs,"
        "Parceiros de distribuição no Nordeste,Tecnologia; SaaS,Empreendedorismo; Vendas\n"
        "user-002,Maria,MEMBER,Consultoria em expansão de negócios,"
        "Clientes no setor de tecnologia e software,Tecnologia; Consultoria,Networking; Vendas\n"
        "user-003,Pedro,MEMBER,Frutas orgânicas direto do produtor,"
        "Restaurantes e mercados premium,Alimentação; Saúde,Sustentabilidade; Agro\n"
        "user-004,Carla,TEAM,,,Tecnologia,Vendas\n",
        encoding="utf-8",
    )
    return path
