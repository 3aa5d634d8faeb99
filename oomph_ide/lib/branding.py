from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from xml.sax.saxutils import quoteattr

from .files import copy_file, modify_file, write_text

logger = logging.getLogger(__name__)

BRANDING_BUNDLE = "oomph.ide.branding"
BRANDING_VERSION = "1.0.0"
PRODUCT_ID = f"{BRANDING_BUNDLE}.product"
BUNDLES_INFO = "configuration/org.eclipse.equinox.simpleconfigurator/bundles.info"

DEFAULT_PERSPECTIVE = "org.eclipse.jdt.ui.JavaPerspective"

PLUGIN_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<?eclipse version="3.4"?>
<plugin>
   <extension id="product" point="org.eclipse.core.runtime.products">
      <product application="org.eclipse.ui.ide.workbench" name=%name%>
         <property name="appName" value=%name%/>
         <property name="preferenceCustomization" value="plugin_customization.ini"/>
%window_images%      </product>
   </extension>
</plugin>
"""

PLUGIN_CUSTOMIZATION = f"""\
org.eclipse.ui/defaultPerspectiveId={DEFAULT_PERSPECTIVE}
org.eclipse.ui/SHOW_PROGRESS_ON_STARTUP=true
org.eclipse.ui.ide/SHOW_WORKSPACE_SELECTION_DIALOG=false
"""

MANIFEST = f"""\
Manifest-Version: 1.0
Bundle-ManifestVersion: 2
Bundle-Name: IDE branding
Bundle-SymbolicName: {BRANDING_BUNDLE};singleton:=true
Bundle-Version: {BRANDING_VERSION}
Require-Bundle: org.eclipse.core.runtime
"""


@dataclass(frozen=True)
class BrandingResult:
    plugin_dir: Path
    # Relative to the eclipse root, as eclipse.ini expects it.
    splash: Optional[str]
    icon: Optional[str]


def choose_images(icon: Optional[Path], splash: Optional[Path]) -> Tuple[Optional[Path], Optional[Path]]:
    """None set: no images. One set: used for both. Both set: each used."""

    if icon is None and splash is None:
        return None, None
    if icon is None or splash is None:
        only = icon if icon is not None else splash
        return only, only
    return icon, splash


def bundles_info_line() -> str:
    return f"{BRANDING_BUNDLE},{BRANDING_VERSION},dropins/{BRANDING_BUNDLE}/,4,true"


def _append_bundle(content: str) -> str:
    line = bundles_info_line()
    if line in content.splitlines():
        return content
    if content and not content.endswith(("\n", "\r")):
        content += os.linesep
    return content + line + os.linesep


def render_plugin_xml(name: str, icon_file: Optional[str]) -> str:
    window_images = ""
    if icon_file:
        window_images = f'         <property name="windowImages" value={quoteattr(icon_file)}/>\n'
    return PLUGIN_XML.replace("%name%", quoteattr(name)).replace("%window_images%", window_images)


def render_plugin_customization(perspective: str) -> str:
    return PLUGIN_CUSTOMIZATION.replace(DEFAULT_PERSPECTIVE, perspective)


def write_branding_plugin(
    eclipse_root: Path,
    *,
    name: str,
    perspective: str,
    icon: Optional[Path] = None,
    splash: Optional[Path] = None,
    dry_run: bool = False,
) -> BrandingResult:
    """Write the branding plugin into ``dropins`` and register it in bundles.info."""

    icon_img, splash_img = choose_images(icon, splash)
    plugin_dir = Path(eclipse_root) / "dropins" / BRANDING_BUNDLE

    icon_file = splash_file = None
    if icon_img is not None:
        icon_file = "icon" + icon_img.suffix.lower()
        copy_file(icon_img, plugin_dir / icon_file, dry_run=dry_run)
    if splash_img is not None:
        splash_file = "splash" + splash_img.suffix.lower()
        copy_file(splash_img, plugin_dir / splash_file, dry_run=dry_run)

    write_text(plugin_dir / "plugin.xml", render_plugin_xml(name, icon_file), dry_run=dry_run)
    write_text(
        plugin_dir / "plugin_customization.ini",
        render_plugin_customization(perspective),
        dry_run=dry_run,
    )
    write_text(plugin_dir / "META-INF" / "MANIFEST.MF", MANIFEST, dry_run=dry_run)

    modify_file(Path(eclipse_root) / BUNDLES_INFO, _append_bundle, dry_run=dry_run)
    logger.info("Branding plugin written to %s (name=%s, perspective=%s)", plugin_dir, name, perspective)

    prefix = f"dropins/{BRANDING_BUNDLE}/"
    return BrandingResult(
        plugin_dir=plugin_dir,
        splash=prefix + splash_file if splash_file else None,
        icon=prefix + icon_file if icon_file else None,
    )
