"""
Range Resolution Component.

Responsible for turning a sparse bookmark forest (title + start page) into a
complete outline where every node carries an inclusive end page.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from core.constants import FALLBACK_PAGE_TITLE
from core.models import OutlineNode, RawOutlineNode


@dataclass
class _LevelFrame:
    """One sibling level on the explicit traversal stack."""
    siblings: List[RawOutlineNode]
    context_end: int
    index: int = 0
    tentative_end: int = 0
    resolved: List[OutlineNode] = field(default_factory=list)


class RangeResolver:
    """
    Assigns end pages to outline nodes.
    
    Works top-down for bounding context (a level is bounded by its parent's
    tentative end) and bottom-up for extension (a parent grows to cover its
    last child). The raw input is never mutated.
    """
    
    @staticmethod
    def resolve(
        nodes: Sequence[RawOutlineNode],
        total_pages: int,
        logger = None
    ) -> List[OutlineNode]:
        """
        Resolve a raw bookmark forest against the document's page count.
        
        Args:
            nodes: Raw outline forest (title, start_page, items)
            total_pages: Number of pages in the document
            logger: Optional logger
            
        Returns:
            Resolved forest with end pages, children sorted by start page
        """
        if total_pages < 1:
            return []
        
        if not nodes:
            return RangeResolver.build_fallback_outline(total_pages)
        
        stack = [_LevelFrame(RangeResolver._sort_level(nodes, total_pages), total_pages)]
        finished = None
        
        while stack:
            frame = stack[-1]
            
            if finished is not None:
                # A child level just completed for siblings[index]
                node = frame.siblings[frame.index]
                end_page = frame.tentative_end
                last_child = finished[-1]
                if last_child.end_page > end_page:
                    if logger:
                        logger.warning(
                            f"Outline node '{node.title}' extended from page {end_page} "
                            f"to {last_child.end_page} to cover its last child"
                        )
                    end_page = last_child.end_page
                frame.resolved.append(OutlineNode(
                    title=node.title,
                    start_page=node.start_page,
                    end_page=end_page,
                    children=finished
                ))
                frame.index += 1
                finished = None
                continue
            
            if frame.index >= len(frame.siblings):
                stack.pop()
                finished = frame.resolved
                continue
            
            node = frame.siblings[frame.index]
            if frame.index + 1 < len(frame.siblings):
                tentative_end = frame.siblings[frame.index + 1].start_page - 1
            else:
                tentative_end = frame.context_end
            
            # Next sibling on the same page (or out of order) still leaves one page
            tentative_end = max(tentative_end, node.start_page)
            
            if node.items:
                frame.tentative_end = tentative_end
                stack.append(_LevelFrame(
                    RangeResolver._sort_level(node.items, total_pages),
                    tentative_end
                ))
                continue
            
            frame.resolved.append(OutlineNode(
                title=node.title,
                start_page=node.start_page,
                end_page=tentative_end
            ))
            frame.index += 1
        
        if logger:
            logger.info(f"Resolved {len(finished)} top-level outline nodes over {total_pages} pages")
        
        return finished
    
    @staticmethod
    def build_fallback_outline(total_pages: int) -> List[OutlineNode]:
        """
        Build one leaf node per page for documents without bookmarks.
        
        Args:
            total_pages: Number of pages in the document
            
        Returns:
            Flat outline with "Page N" nodes
        """
        return [
            OutlineNode(
                title=FALLBACK_PAGE_TITLE.format(page=page),
                start_page=page,
                end_page=page
            )
            for page in range(1, total_pages + 1)
        ]
    
    @staticmethod
    def _sort_level(nodes: Sequence[RawOutlineNode], total_pages: int) -> List[RawOutlineNode]:
        """Clamp start pages into the document and stably sort a sibling level."""
        clamped = []
        for node in nodes:
            start_page = min(max(node.start_page, 1), total_pages)
            if start_page != node.start_page:
                node = RawOutlineNode(title=node.title, start_page=start_page, items=node.items)
            clamped.append(node)
        return sorted(clamped, key=lambda item: item.start_page)
