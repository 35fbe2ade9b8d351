import pytest

from surgeon import StaticEvaluator


ARTICLE_HTML = """
<html>
  <head><title>Listing</title></head>
  <body>
    <article class="post featured" id="first">
      <h1>First post</h1>
      <a href="/one" class="external">One</a>
      <a href="/two">Two</a>
    </article>
    <article class="post" id="second">
      <h1>Second post</h1>
      <p>No links here</p>
    </article>
    <input name="q" value="search terms">
  </body>
</html>
"""


@pytest.fixture
def evaluator():
    return StaticEvaluator()


@pytest.fixture
def document(evaluator):
    return evaluator.parse_document(ARTICLE_HTML)


@pytest.fixture
def article_html():
    return ARTICLE_HTML
