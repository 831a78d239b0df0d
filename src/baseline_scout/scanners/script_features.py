"""Script identifiers worth checking against the feature catalog.

Maps an identifier as it appears in JS/TS source (a global, a constructor,
a method or property name) to the feature-identifier fragment used to find
its catalog entry. Fragments go through ``FeatureIndex.find``, so casing
and punctuation do not matter: ``structured-clone`` also finds
``api-structuredClone``.

Generic names (``at``, ``any``, ``with``, ``union``) are left out on
purpose; they collide with too many user-defined identifiers.
"""

from __future__ import annotations

SCRIPT_FEATURES: dict[str, str] = {
    # Globals and constructors
    "structuredClone": "structured-clone",
    "fetch": "fetch",
    "AbortController": "abortable-fetch",
    "AbortSignal": "abortable-fetch",
    "IntersectionObserver": "intersection-observer",
    "ResizeObserver": "resize-observer",
    "MutationObserver": "mutationobserver",
    "BroadcastChannel": "broadcast-channel",
    "requestIdleCallback": "requestidlecallback",
    "queueMicrotask": "queuemicrotask",
    "WeakRef": "weakrefs",
    "FinalizationRegistry": "weakrefs",
    "AggregateError": "promise-any",
    "BigInt": "bigint",
    "globalThis": "globalthis",
    "WebSocket": "websockets",
    "WebSocketStream": "websocketstream",
    "SharedArrayBuffer": "shared-memory",
    "OffscreenCanvas": "offscreen-canvas",
    "CompressionStream": "compression-streams",
    "DecompressionStream": "compression-streams",
    "ReadableStream": "streams",
    "WritableStream": "streams",
    "TransformStream": "streams",
    "URLPattern": "urlpattern",
    "Temporal": "temporal",
    "PaymentRequest": "payment-request",
    "IdleDetector": "idle-detection",
    "EyeDropper": "eyedropper",
    "CookieStore": "cookie-store",
    "cookieStore": "cookie-store",
    "trustedTypes": "trusted-types",
    "documentPictureInPicture": "document-picture-in-picture",
    "Segmenter": "intl-segmenter",
    "ListFormat": "intl-list-format",
    # Methods
    "showOpenFilePicker": "file-system-access",
    "showSaveFilePicker": "file-system-access",
    "showDirectoryPicker": "file-system-access",
    "startViewTransition": "view-transitions",
    "showPopover": "popover",
    "requestStorageAccess": "storage-access",
    "postTask": "scheduler",
    "replaceAll": "string-replaceall",
    "findLast": "array-findlast",
    "findLastIndex": "array-findlast",
    "toSorted": "array-by-copy",
    "toReversed": "array-by-copy",
    "toSpliced": "array-by-copy",
    "hasOwn": "object-hasown",
    "groupBy": "array-group",
    "withResolvers": "promise-withresolvers",
    "fromAsync": "array-fromasync",
    # navigator.* properties
    "clipboard": "async-clipboard",
    "share": "web-share",
    "gpu": "webgpu",
    "locks": "web-locks",
    "serial": "serial",
    "usb": "webusb",
    "bluetooth": "web-bluetooth",
}
