"""Client loader shim and load-strategy script tags.

Client-side globals touched by the emitted scripts (one set per page load,
discarded on navigation):

  window.mermaidConfig  written by the init script (see ``script.py``)
  window.mermaid        the library, or the queueing stand-in installed here

The shim installs a stand-in ``window.mermaid`` whose methods queue their
calls, loads the real library asynchronously, then splices the real methods
onto the stand-in and replays the queue in FIFO order. On load failure the
stubs go quiet and every ``pre.mermaid`` target is rewritten into a plain
code block, once the document has finished parsing. The Python
model of this state machine is ``mermaid_html.loader``.
"""

from __future__ import annotations

from html import escape

from mermaid_html.types import DEFAULT_CDN_VERSION, Cdn, Custom, Embedded, LoadStrategy

CDN_URL_TEMPLATE = "https://cdn.jsdelivr.net/npm/mermaid@{version}/dist/mermaid.min.js"

# Methods the stand-in exposes before the real library arrives.
STAND_IN_METHODS: tuple[str, ...] = ("init", "initialize", "run", "render")


def cdn_url(version: str) -> str:
    """CDN URL for ``version``. The version string is not validated."""
    return CDN_URL_TEMPLATE.format(version=version)


EMBEDDED_LOADER_JS = """\
(function() {
    if (typeof window.mermaid !== 'undefined') {
        return;
    }

    var queue = [];
    var standIn = { _state: 'loading' };

    %(stubs)s.forEach(function(name) {
        standIn[name] = function() {
            if (standIn._state === 'failed') {
                return;
            }
            queue.push([name, Array.prototype.slice.call(arguments)]);
        };
    });
    window.mermaid = standIn;

    var script = document.createElement('script');
    script.src = '%(url)s';
    script.onload = function() {
        var real = window.mermaid;
        window.mermaid = standIn;
        Object.keys(real).forEach(function(key) {
            var value = real[key];
            standIn[key] = typeof value === 'function' ? value.bind(real) : value;
        });
        standIn._state = 'ready';
        var pending = queue;
        queue = [];
        pending.forEach(function(call) {
            real[call[0]].apply(real, call[1]);
        });
    };
    script.onerror = function() {
        standIn._state = 'failed';
        queue = [];
        console.error('mermaid: failed to load ' + script.src);
        var rewrite = function() {
            document.querySelectorAll('pre.mermaid').forEach(function(el) {
                var pre = document.createElement('pre');
                var code = document.createElement('code');
                code.className = 'language-mermaid';
                code.textContent = el.textContent;
                pre.appendChild(code);
                el.parentNode.replaceChild(pre, el);
            });
        };
        // Targets after this script may not be parsed yet.
        if (document.readyState === 'loading') {
            document.addEventListener('DOMContentLoaded', rewrite);
        } else {
            rewrite();
        }
    };
    document.head.appendChild(script);
})();
""" % {
    "stubs": "[" + ", ".join(f"'{name}'" for name in STAND_IN_METHODS) + "]",
    "url": cdn_url(DEFAULT_CDN_VERSION),
}


def loader_tag(strategy: LoadStrategy) -> str:
    """Return the ``<script>`` tag that makes the library available."""
    if isinstance(strategy, Embedded):
        return f"<script>\n{EMBEDDED_LOADER_JS}</script>\n"
    if isinstance(strategy, Cdn):
        return f'<script src="{escape(cdn_url(strategy.version))}"></script>\n'
    if isinstance(strategy, Custom):
        return f'<script src="{escape(strategy.url)}"></script>\n'
    raise ValueError(f"Unknown load strategy: {strategy!r}")
