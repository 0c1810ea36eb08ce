"""Unit tests for GraphMutationService against an in-memory store."""

from unittest.mock import patch

import pytest

from graph_canvas.models.graph import EdgeDraft, EdgePatch, NodeDraft, NodePatch
from graph_canvas.services.graph_query_service import GraphQueryService
from graph_canvas.services.mutation_service import GraphMutationService
from graph_canvas.utils.exceptions import NotFoundError, StoreError, ValidationError
from graph_canvas.utils.ids import new_id


@pytest.fixture
def mutations(db):
    return GraphMutationService(db)


@pytest.fixture
def queries(db):
    return GraphQueryService(db)


@pytest.mark.asyncio
async def test_create_node_defaults(mutations, queries):
    node = await mutations.create_node(NodeDraft(label="React"))
    assert queries.get_node(node.id) == node
    assert node.type == "default"


@pytest.mark.asyncio
async def test_create_node_without_label_creates_nothing(mutations, queries):
    with pytest.raises(ValidationError):
        await mutations.create_node(NodeDraft())
    assert queries.stats()["nodes"] == 0


@pytest.mark.asyncio
async def test_update_node_rejects_malformed_id(mutations):
    with pytest.raises(ValidationError):
        await mutations.update_node("not-an-id", NodePatch(label="x"))


@pytest.mark.asyncio
async def test_update_node_accepts_hyphenated_id(mutations):
    node = await mutations.create_node(NodeDraft(label="A"))
    hyphenated = f"{node.id[:8]}-{node.id[8:12]}-{node.id[12:16]}-{node.id[16:20]}-{node.id[20:]}"
    updated = await mutations.update_node(hyphenated, NodePatch(label="B"))
    assert updated.id == node.id
    assert updated.label == "B"


@pytest.mark.asyncio
async def test_delete_node_cascades_to_edges(mutations, queries):
    a = await mutations.create_node(NodeDraft(label="A"))
    b = await mutations.create_node(NodeDraft(label="B"))
    c = await mutations.create_node(NodeDraft(label="C"))
    await mutations.create_edge(EdgeDraft(source=a.id, target=b.id))
    await mutations.create_edge(EdgeDraft(source=c.id, target=a.id))
    kept = await mutations.create_edge(EdgeDraft(source=b.id, target=c.id))

    removed = await mutations.delete_node(a.id)

    graph = queries.get_graph()
    assert removed == 2
    assert {n.id for n in graph.nodes} == {b.id, c.id}
    assert [e.id for e in graph.edges] == [kept.id]


@pytest.mark.asyncio
async def test_delete_node_twice_raises_not_found(mutations):
    node = await mutations.create_node(NodeDraft(label="A"))
    assert await mutations.delete_node(node.id) == 0
    with pytest.raises(NotFoundError):
        await mutations.delete_node(node.id)


@pytest.mark.asyncio
async def test_delete_missing_node_rolls_back_edge_removal(db, mutations, queries):
    """Edges deleted before the node lookup fails must be restored."""
    a = await mutations.create_node(NodeDraft(label="A"))
    b = await mutations.create_node(NodeDraft(label="B"))
    edge = await mutations.create_edge(EdgeDraft(source=a.id, target=b.id))

    # Remove the node row behind the service's back, leaving its edge dangling
    cur = db.cursor()
    cur.execute("DELETE FROM nodes WHERE id = ?", (a.id,))
    cur.close()

    with pytest.raises(NotFoundError):
        await mutations.delete_node(a.id)

    assert queries.get_edge(edge.id).id == edge.id


@pytest.mark.asyncio
async def test_failure_between_steps_rolls_back(mutations, queries):
    a = await mutations.create_node(NodeDraft(label="A"))
    b = await mutations.create_node(NodeDraft(label="B"))
    edge = await mutations.create_edge(EdgeDraft(source=a.id, target=b.id))

    with patch.object(mutations.nodes, "delete", side_effect=StoreError("disk full")):
        with pytest.raises(StoreError):
            await mutations.delete_node(a.id)

    graph = queries.get_graph()
    assert {n.id for n in graph.nodes} == {a.id, b.id}
    assert [e.id for e in graph.edges] == [edge.id]


@pytest.mark.asyncio
async def test_create_edge_requires_existing_nodes(mutations, queries):
    a = await mutations.create_node(NodeDraft(label="A"))

    with pytest.raises(NotFoundError) as exc_info:
        await mutations.create_edge(EdgeDraft(source=a.id, target=new_id()))

    assert exc_info.value.message == "One or both nodes not found"
    assert queries.stats()["edges"] == 0


@pytest.mark.asyncio
async def test_create_edge_rejects_malformed_ids(mutations):
    with pytest.raises(ValidationError):
        await mutations.create_edge(EdgeDraft(source="bad", target="worse"))
    with pytest.raises(ValidationError):
        await mutations.create_edge(EdgeDraft(source=new_id()))


@pytest.mark.asyncio
async def test_self_loop_edge(mutations):
    a = await mutations.create_node(NodeDraft(label="A"))
    edge = await mutations.create_edge(EdgeDraft(source=a.id, target=a.id))
    assert edge.source == edge.target == a.id
    assert await mutations.delete_node(a.id) == 1


@pytest.mark.asyncio
async def test_update_and_delete_edge(mutations, queries):
    a = await mutations.create_node(NodeDraft(label="A"))
    b = await mutations.create_node(NodeDraft(label="B"))
    edge = await mutations.create_edge(EdgeDraft(source=a.id, target=b.id, label="uses"))

    updated = await mutations.update_edge(edge.id, EdgePatch(properties={"weight": 3}))
    assert updated.properties == {"weight": 3}
    assert updated.label == "uses"

    await mutations.delete_edge(edge.id)
    with pytest.raises(NotFoundError):
        await mutations.delete_edge(edge.id)
    assert queries.stats() == {"nodes": 2, "edges": 0}


@pytest.mark.asyncio
async def test_clear_graph(mutations, queries):
    a = await mutations.create_node(NodeDraft(label="A"))
    b = await mutations.create_node(NodeDraft(label="B"))
    await mutations.create_edge(EdgeDraft(source=a.id, target=b.id))

    assert await mutations.clear_graph() == (2, 1)
    assert queries.stats() == {"nodes": 0, "edges": 0}
