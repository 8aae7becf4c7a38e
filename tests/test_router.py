"""
Tests for crawler / human classification
"""
import pytest

from core.config import BOT_AGENTS
from core.router import RouteDecider


@pytest.fixture
def decider():
    return RouteDecider()


@pytest.mark.parametrize("agent", BOT_AGENTS)
def test_every_bot_signature_is_a_crawler(decider, agent):
    decision = decider.classify(f"Mozilla/5.0 (compatible; {agent}/1.0)")
    assert decision.route == "crawler"
    assert decision.matched_agent == agent


def test_googlebot_user_agent(decider):
    assert decider.classify("Mozilla/5.0 (compatible; Googlebot/2.1)").is_crawler


@pytest.mark.parametrize(
    "user_agent",
    [
        "Mozilla/5.0 (Macintosh)",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)",
        "curl/8.4.0",
        "",
    ],
)
def test_browsers_are_human(decider, user_agent):
    decision = decider.classify(user_agent)
    assert decision.route == "human"
    assert decision.matched_agent is None


def test_missing_user_agent_is_human(decider):
    assert decider.classify(None).route == "human"


def test_case_insensitive(decider):
    assert decider.classify("GOOGLEBOT") == decider.classify("googlebot")
    assert decider.classify("GoogleBot").is_crawler


def test_substring_not_exact_match(decider):
    assert decider.classify("discordbot-embed").is_crawler
    assert decider.classify("Mozilla/5.0 (compatible; Discordbot/2.0; +https://discordapp.com)").is_crawler


def test_multi_word_signature(decider):
    ua = "Mozilla/5.0 (compatible; Yahoo! Slurp; http://help.yahoo.com/help/us/ysearch/slurp)"
    assert decider.classify(ua).matched_agent == "yahoo! slurp"


def test_custom_agents_are_lowercased():
    decider = RouteDecider(["MyCrawler", ""])
    assert decider.bot_agents == ("mycrawler",)
    assert decider.classify("mycrawler/1.0").is_crawler
    assert not decider.classify("Googlebot").is_crawler


def test_classification_is_stable(decider):
    ua = "slackbot-linkexpanding"
    assert decider.classify(ua) == decider.classify(ua)
