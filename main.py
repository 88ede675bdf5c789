from __future__ import annotations
import io
import logging
from typing import List

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import pandas as pd
import streamlit as st

from page_probe.config import ProbeSettings
from page_probe.datatypes import SummaryResult
from page_probe.graphing import build_graph, isolated_sentences, node_degrees
from page_probe.locator import ContentLocator
from page_probe.pipeline import extract_article_text, extract_page_summary, is_landing_page
from page_probe.summarize import SentencesDocumentProcessor
from page_probe.tree import parse_html

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PAGE_ICON = ":page_facing_up:"

def preview(text: str, limit: int = 80) -> str:
    return text[:limit] + "..." if len(text) > limit else text

def draw_graph_visualization(graph, selected: List[int]):
    """Sentence similarity graph; selected summary sentences are highlighted."""
    G = nx.Graph()
    for doc in graph.documents:
        G.add_node(doc.sort_order, preview=preview(doc.original, 30))
    for edge in graph.edges:
        G.add_edge(edge.source, edge.target, weight=edge.similarity)

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.set_title("Sentence Similarity Graph", fontsize=14, fontweight='bold')

    if len(G.nodes) > 0:
        pos = nx.spring_layout(G, k=2, iterations=50, seed=42)
        nx.draw_networkx_nodes(G, pos, ax=ax, node_color='lightblue', node_size=600, alpha=0.7)

        edges = G.edges(data=True)
        if edges:
            weights = [e[2]['weight'] for e in edges]
            max_weight = max(weights) if weights else 1
            nx.draw_networkx_edges(G, pos, ax=ax,
                                   width=[3 * (w / max_weight) for w in weights],
                                   alpha=0.6, edge_color='gray')

        if selected:
            nx.draw_networkx_nodes(G, pos, nodelist=selected, ax=ax,
                                   node_color='yellow', node_size=800, alpha=0.9)

        labels = {i: f"S{i+1}" for i in G.nodes()}
        nx.draw_networkx_labels(G, pos, labels, ax=ax, font_size=9, font_weight='bold')

    ax.set_aspect('equal')
    ax.axis('off')
    plt.tight_layout()

    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close()
    return buf

def create_sidebar_controls():
    st.sidebar.header("Settings")
    summary_size = st.sidebar.slider(
        "Summary size", min_value=1, max_value=3, value=2, step=1,
        help="Controls how many key sentences should be returned to summarize the page",
    )
    show_icon = st.sidebar.checkbox(
        "Show page icon", value=True,
        help="Prefix the summary heading with a page icon",
    )
    suppress_landing = st.sidebar.checkbox(
        "Suppress landing and search pages", value=True,
        help="Skip pages whose path is '/', '/search' or empty",
    )
    page_path = st.sidebar.text_input("Page path", value="/article", help="URL path of the uploaded page")

    st.sidebar.header("Debug Options")
    threshold = st.sidebar.slider(
        "Graph similarity threshold", min_value=0.05, max_value=1.0, value=0.2, step=0.05,
        help="Minimum similarity for an edge in the sentence graph",
    )
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=True, help="Show detailed pipeline steps")

    settings = ProbeSettings(show_icon=show_icon, summary_size=summary_size, suppress_landing=suppress_landing)
    return settings, page_path, threshold, debug_mode

def debug_pipeline(html: str, settings: ProbeSettings, page_path: str, sim_threshold: float):
    root = parse_html(html)
    locator = ContentLocator()

    st.header("Step 1: Article Container")
    with st.expander("Container Scoring Details", expanded=True):
        if settings.suppress_landing and is_landing_page(page_path, settings):
            st.warning(f"Path {page_path!r} is a landing/search page; the real run will skip it")

        with st.spinner("Locating article container..."):
            text = extract_article_text(root, locator)

        candidates = [
            {"Element": repr(n), "Score": round(score, 2), "Text Length": locator.calculate_text_length(n)}
            for n, score in locator.scored_nodes()
        ]
        if candidates:
            candidates_df = pd.DataFrame(candidates).sort_values("Score", ascending=False)
            st.dataframe(candidates_df, use_container_width=True)
        if text is None:
            st.error("No positively scored container found")
            return
        st.success(f"Extracted {len(text)} characters")

    st.header("Step 2: Extracted Text")
    with st.expander("Text Segments", expanded=False):
        segments = [s for s in text.split("\n") if s]
        st.dataframe(pd.DataFrame({"Segment": segments}), use_container_width=True)

    st.header("Step 3: Sentences & Bags of Words")
    with st.expander("Tokenization Details", expanded=True):
        with st.spinner("Processing text..."):
            content = SentencesDocumentProcessor(text, settings.summary_config())
        docs = content.documents

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Sentences", len(docs))
        with col2:
            st.metric("Words", sum(len(d.words) for d in docs))
        with col3:
            st.metric("Topics", len(content.topics))

        sentences_df = pd.DataFrame([{
            "Sentence #": d.sort_order + 1,
            "Original Text": preview(d.original),
            "Words": d.bag.inner_length,
            "Bag Terms": ", ".join(list(d.bag.counts)[:8]),
            "Score": round(d.score, 4),
        } for d in docs])
        st.dataframe(sentences_df, use_container_width=True)

    st.header("Step 4: Similarity Matrix")
    with st.expander("Similarity Details", expanded=True):
        matrix = content.matrix
        n = len(matrix)
        if n <= 50:
            labels = [f"S{i+1}" for i in range(n)]
            st.dataframe(pd.DataFrame(matrix.rows, columns=labels, index=labels), use_container_width=True)
        elif n > 1:
            st.info(f"Matrix too large to display ({n}x{n} = {n**2:,} cells)")
            flat = np.array([matrix.rows[i][j] for i in range(n) for j in range(i + 1, n)])
            col1, col2, col3, col4 = st.columns(4)
            with col1:
                st.metric("Min Similarity", f"{flat.min():.3f}")
            with col2:
                st.metric("Max Similarity", f"{flat.max():.3f}")
            with col3:
                st.metric("Mean Similarity", f"{flat.mean():.3f}")
            with col4:
                st.metric("Std Similarity", f"{flat.std():.3f}")

        graph = build_graph(docs, matrix, threshold=sim_threshold)
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Edges", len(graph.edges))
        with col2:
            st.metric("Isolated Sentences", len(isolated_sentences(graph)))
        with col3:
            degrees = node_degrees(graph)
            st.metric("Mean Degree", f"{np.mean(degrees):.2f}" if degrees else "0")

        selected = [d.sort_order for d in content.get_top_k_documents()]
        if 0 < n <= 50:
            try:
                st.image(draw_graph_visualization(graph, selected),
                         caption="Yellow nodes are selected for the summary", use_container_width=True)
            except Exception as e:
                st.error(f"Could not generate graph visualization: {str(e)}")

    st.header("Step 5: Topics")
    with st.expander("Topic Details", expanded=True):
        topics_df = pd.DataFrame([
            {"Topic": t.phrase, "Count": t.count, "Score": round(t.score, 2)}
            for t in content.topics.values()
        ])
        st.dataframe(topics_df, use_container_width=True)
        st.metric("Top-K value", content.get_top_k_value())

def summary_heading(result: SummaryResult, settings: ProbeSettings) -> str:
    title = result.title or "Untitled page"
    return f"{PAGE_ICON} {title}" if settings.show_icon else title

def render_result(result: SummaryResult, settings: ProbeSettings):
    if not result.success:
        st.warning(result.message)
        return
    st.header(summary_heading(result, settings))
    st.caption(
        f"Summarized a {result.original_word_count} word document in {result.summary_word_count} words, "
        f"reducing the reading time by {result.minutes_saved} minutes"
    )
    if result.description:
        st.subheader("Brief Description")
        st.write(result.description)

    st.subheader(f"Word Clusters ({len(result.top_topics)})")
    st.write(" · ".join(f"{t.phrase} ({t.count})" for t in result.top_topics))

    st.subheader(f"Summarization ({len(result.top_sentences)})")
    for doc in result.top_sentences:
        st.markdown(f"- {doc.original}")

def main():
    st.title("Page Probe")
    st.write("Upload an HTML page to locate its article body and summarize it")

    settings, page_path, threshold, debug_mode = create_sidebar_controls()

    uploaded_file = st.file_uploader(
        "Choose an HTML file",
        type=['html', 'htm'],
        help="Saved web page to summarize",
    )

    if uploaded_file is not None:
        html = uploaded_file.read().decode("utf-8", errors="replace")

        if st.button("Generate Summary", type="primary"):
            try:
                if debug_mode:
                    st.markdown("---")
                    st.title("Pipeline Debug Mode")
                    debug_pipeline(html, settings, page_path, threshold)

                with st.spinner("Generating summary..."):
                    result = extract_page_summary(parse_html(html), settings, path=page_path)

                st.markdown("---")
                render_result(result, settings)
            except Exception as e:
                logger.exception("Summarization failed")
                st.error(f"Error generating summary: {str(e)}")
                st.exception(e)

if __name__ == "__main__":
    main()
