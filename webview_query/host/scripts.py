"""Browser-side scripts used to capture a live page and replay actions into it."""

# Serializes the live DOM into a JSON tree. Every element gets an index into
# window.__webviewQueryNodes so that recorded actions can find it again.
SNAPSHOT_SCRIPT = """
() => {
    const nodes = [];
    window.__webviewQueryNodes = nodes;
    const range = document.createRange();

    const rectOf = (rect) => ({
        left: rect.left,
        top: rect.top,
        width: rect.width,
        height: rect.height
    });

    const serialize = (node) => {
        if (node.nodeType === Node.TEXT_NODE) {
            range.selectNodeContents(node);
            return {
                type: 'text',
                text: node.textContent,
                rect: rectOf(range.getBoundingClientRect())
            };
        }
        if (node.nodeType === Node.COMMENT_NODE) {
            return { type: 'comment', text: node.data };
        }
        if (node.nodeType !== Node.ELEMENT_NODE) {
            return null;
        }

        const index = nodes.length;
        nodes.push(node);

        const attributes = [];
        for (const attribute of node.attributes) {
            attributes.push([attribute.name, attribute.value]);
        }

        const children = [];
        for (const child of node.childNodes) {
            const serialized = serialize(child);
            if (serialized) {
                children.push(serialized);
            }
        }

        return {
            type: 'element',
            index: index,
            tag: node.tagName,
            attributes: attributes,
            rect: rectOf(node.getBoundingClientRect()),
            innerText: typeof node.innerText === 'string' ? node.innerText : null,
            value: typeof node.value === 'string' ? node.value : null,
            children: children
        };
    };

    return serialize(document.documentElement);
}
"""

# Replays recorded clicks and value writes against the captured nodes.
REPLAY_SCRIPT = """
(mutations) => {
    const nodes = window.__webviewQueryNodes || [];
    let applied = 0;

    for (const mutation of mutations) {
        const node = nodes[mutation.index];
        if (!node || !node.isConnected) {
            continue;
        }

        if (mutation.kind === 'click') {
            const event = new MouseEvent('click', {
                bubbles: mutation.bubbles,
                cancelable: mutation.cancelable,
                view: window,
                detail: mutation.detail,
                button: mutation.button,
                altKey: mutation.altKey,
                ctrlKey: mutation.ctrlKey,
                metaKey: mutation.metaKey,
                shiftKey: mutation.shiftKey
            });
            node.dispatchEvent(event);
        } else {
            node.value = mutation.value;
        }
        applied++;
    }

    return applied;
}
"""
