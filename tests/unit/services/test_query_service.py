"""Unit tests for GraphQueryService."""

import pytest

from graph_canvas.models.graph import EdgeDraft, NodeDraft
from graph_canvas.services.graph_query_service import GraphQueryService
from graph_canvas.services.mutation_service import GraphMutationService
from graph_canvas.utils.exceptions import NotFoundError, ValidationError
from graph_canvas.utils.ids import new_id


class TestGraphQueryService:
    @pytest.fixture
    def queries(self, db):
        return GraphQueryService(db)

    @pytest.fixture
    def mutations(self, db):
        return GraphMutationService(db)

    def test_empty_graph(self, queries):
        graph = queries.get_graph()
        assert graph.nodes == []
        assert graph.edges == []

    @pytest.mark.asyncio
    async def test_get_graph_returns_everything(self, queries, mutations):
        a = await mutations.create_node(NodeDraft(label="A"))
        b = await mutations.create_node(NodeDraft(label="B"))
        edge = await mutations.create_edge(EdgeDraft(source=a.id, target=b.id))

        graph = queries.get_graph()
        assert [n.id for n in graph.nodes] == [a.id, b.id]
        assert [e.id for e in graph.edges] == [edge.id]

    def test_get_node_validates_id(self, queries):
        with pytest.raises(ValidationError):
            queries.get_node("nope")
        with pytest.raises(NotFoundError):
            queries.get_node(new_id())

    def test_get_edge_validates_id(self, queries):
        with pytest.raises(ValidationError):
            queries.get_edge("nope")
        with pytest.raises(NotFoundError):
            queries.get_edge(new_id())


class TestSearchNodes:
    @pytest.fixture
    def queries(self, db):
        return GraphQueryService(db)

    @pytest.fixture
    def mutations(self, db):
        return GraphMutationService(db)

    @pytest.mark.asyncio
    async def test_case_insensitive_label_match(self, queries, mutations):
        await mutations.create_node(NodeDraft(label="React"))
        await mutations.create_node(NodeDraft(label="TypeScript"))

        assert [n.label for n in queries.search_nodes("react")] == ["React"]

    @pytest.mark.asyncio
    async def test_type_match(self, queries, mutations):
        await mutations.create_node(NodeDraft(label="MongoDB", type="database"))
        await mutations.create_node(NodeDraft(label="Vite", type="build-tool"))

        assert [n.label for n in queries.search_nodes("DATA")] == ["MongoDB"]

    @pytest.mark.asyncio
    async def test_blank_query_returns_nothing(self, queries, mutations):
        await mutations.create_node(NodeDraft(label="React"))
        assert queries.search_nodes("") == []
        assert queries.search_nodes("   ") == []

    def test_missing_query_fails(self, queries):
        with pytest.raises(ValidationError):
            queries.search_nodes(None)

    def test_repeated_query_fails(self, queries):
        with pytest.raises(ValidationError):
            queries.search_nodes(["a", "b"])

    @pytest.mark.asyncio
    async def test_results_capped_at_twenty(self, queries, mutations):
        for i in range(25):
            await mutations.create_node(NodeDraft(label=f"Node {i}"))

        results = queries.search_nodes("node")
        assert len(results) == 20
        assert results[0].label == "Node 0"

    @pytest.mark.asyncio
    async def test_query_is_trimmed(self, queries, mutations):
        await mutations.create_node(NodeDraft(label="Tailwind CSS"))
        assert len(queries.search_nodes("  css  ")) == 1


@pytest.mark.asyncio
async def test_stats(db):
    mutations = GraphMutationService(db)
    a = await mutations.create_node(NodeDraft(label="A"))
    await mutations.create_edge(EdgeDraft(source=a.id, target=a.id))
    assert GraphQueryService(db).stats() == {"nodes": 1, "edges": 1}
