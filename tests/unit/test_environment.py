# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Tests for browsing context introspection."""

from types import SimpleNamespace

import pytest

from stroeer_core.environment import (
    AccessDenied,
    EnvironmentProbe,
    StaticBrowsingContext,
    StaticElement,
    StaticRuntime,
)

TOP_REFERRER = "http://www.google.com/?query=monkey"


class TestSecureContext:
    """Tests for is_secure."""

    def test_http_is_not_secure(self, single_runtime):
        assert EnvironmentProbe(single_runtime).is_secure() is False

    def test_https_is_secure(self):
        runtime = StaticRuntime.single("https://www.xyz.com/")
        assert EnvironmentProbe(runtime).is_secure() is True


class TestTopReferrer:
    """Tests for top_referrer."""

    def test_reads_top_document_referrer(self, nested_runtime):
        assert EnvironmentProbe(nested_runtime).top_referrer() == TOP_REFERRER

    def test_falls_back_to_own_referrer(self, nested_contexts, nested_runtime):
        """A cross-origin top page yields the current document's referrer."""
        nested_contexts["top"].restricted = True
        nested_contexts["win"].referrer = "http://www.abc.org/"

        assert EnvironmentProbe(nested_runtime).top_referrer() == "http://www.abc.org/"

    def test_no_referrer_anywhere(self, single_runtime):
        assert EnvironmentProbe(single_runtime).top_referrer() is None


class TestMostAccessibleTopContext:
    """Tests for walking up the frame chain."""

    def test_single_page_is_its_own_top(self, single_runtime):
        probe = EnvironmentProbe(single_runtime)
        assert probe.most_accessible_top_context() is single_runtime.self_context()
        assert probe.is_main_page_accessible() is True

    def test_reaches_readable_top(self, nested_contexts, nested_runtime):
        probe = EnvironmentProbe(nested_runtime)
        assert probe.most_accessible_top_context() is nested_contexts["top"]
        assert probe.is_main_page_accessible() is True

    def test_stops_below_cross_origin_parent(self, nested_contexts, nested_runtime):
        """The walk ends at the last context with a readable parent."""
        nested_contexts["mid"].restricted = True
        probe = EnvironmentProbe(nested_runtime)

        assert probe.most_accessible_top_context() is nested_contexts["win"]
        assert probe.is_main_page_accessible() is False

    def test_stops_below_cross_origin_top(self, nested_contexts, nested_runtime):
        nested_contexts["top"].restricted = True
        probe = EnvironmentProbe(nested_runtime)

        assert probe.most_accessible_top_context() is nested_contexts["mid"]
        assert probe.is_main_page_accessible() is False

    def test_cyclic_chain_terminates(self):
        """A parent cycle is detected instead of looping forever."""
        a = StaticBrowsingContext(href="http://a.com/")
        b = StaticBrowsingContext(href="http://b.com/", parent_context=a)
        a.parent_context = b
        top = StaticBrowsingContext(href="http://top.com/")
        probe = EnvironmentProbe(StaticRuntime(a, top))

        assert probe.most_accessible_top_context() is b
        assert probe.is_main_page_accessible() is False


class TestElementInView:
    """Tests for is_element_in_view."""

    def test_visible_in_single_page(self, single_runtime):
        probe = EnvironmentProbe(single_runtime)
        assert probe.is_element_in_view("div-1") is True
        assert probe.is_element_in_view("div-2") is True

    def test_visible_through_nested_frames(self, nested_runtime):
        probe = EnvironmentProbe(nested_runtime)
        assert probe.is_element_in_view("div-1") is True

    def test_missing_element_is_unknown(self, nested_runtime):
        """Unknown visibility is None, not False."""
        assert EnvironmentProbe(nested_runtime).is_element_in_view("div-9") is None

    def test_element_below_viewport(self, single_runtime, placement_elements):
        placement_elements[0].top = 201
        assert EnvironmentProbe(single_runtime).is_element_in_view("div-1") is False

    def test_element_above_viewport(self, single_runtime, placement_elements):
        placement_elements[0].top = -5
        assert EnvironmentProbe(single_runtime).is_element_in_view("div-1") is False

    def test_element_partly_above_viewport(self, single_runtime, placement_elements):
        placement_elements[0].top = -5
        placement_elements[0].height = 10
        assert EnvironmentProbe(single_runtime).is_element_in_view("div-1") is True

    def test_frame_outside_parent_viewport(self, nested_contexts, nested_runtime):
        """An element in view inside a scrolled-away frame is not in view."""
        nested_contexts["win"].frame.top = 401
        assert EnvironmentProbe(nested_runtime).is_element_in_view("div-1") is False

    def test_outer_frame_outside_top_viewport(self, nested_contexts, nested_runtime):
        nested_contexts["mid"].frame.top = 900
        assert EnvironmentProbe(nested_runtime).is_element_in_view("div-1") is False

    def test_cross_origin_ancestor_is_unknown(self, nested_contexts, nested_runtime):
        nested_contexts["mid"].restricted = True
        assert EnvironmentProbe(nested_runtime).is_element_in_view("div-1") is None

    def test_cross_origin_top_is_unknown(self, nested_contexts, nested_runtime):
        nested_contexts["top"].restricted = True
        assert EnvironmentProbe(nested_runtime).is_element_in_view("div-1") is None

    def test_chain_deeper_than_limit_is_unknown(self, nested_runtime):
        probe = EnvironmentProbe(nested_runtime, max_depth=2)
        assert probe.is_element_in_view("div-1") is None

    def test_cyclic_chain_is_unknown(self):
        a = StaticBrowsingContext(
            href="http://a.com/",
            frame=StaticElement(),
            height=100,
            elements=[StaticElement(id="slot")],
        )
        b = StaticBrowsingContext(
            href="http://b.com/", parent_context=a, frame=StaticElement(), height=100
        )
        a.parent_context = b

        assert EnvironmentProbe(StaticRuntime(a, b)).is_element_in_view("slot") is None


class TestDegradedRuntime:
    """Probe answers with fallbacks when the runtime misbehaves."""

    @pytest.fixture
    def broken_runtime(self):
        def denied():
            raise AccessDenied("blocked")

        context = SimpleNamespace(location=denied, document_referrer=denied)
        return SimpleNamespace(self_context=lambda: context, top_context=lambda: context)

    def test_fallbacks(self, broken_runtime):
        probe = EnvironmentProbe(broken_runtime)

        assert probe.is_secure() is False
        assert probe.top_referrer() is None
        assert probe.is_element_in_view("div-1") is None
        assert probe.is_main_page_accessible() is True
