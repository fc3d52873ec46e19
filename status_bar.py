import os


def render_status(context, width):
    """
    context keys: file_path, page_index, page_total, page_start, page_end,
                   total_rows, editing
    """
    fname = context.get('file_path') or ''
    if fname:
        fname = os.path.basename(fname)
    page_total = context.get('page_total', 1)
    page_index = context.get('page_index', 1)
    page_start = context.get('page_start', 0)
    page_end = context.get('page_end', page_start)
    total_rows = context.get('total_rows', 0)
    if not total_rows:
        rows = "no rows"
    elif page_start >= total_rows:
        rows = f"no rows on this page of {total_rows}"
    else:
        rows = f"rows {page_start + 1}-{max(page_start + 1, page_end)} of {total_rows}"
    page_info = f"Page {page_index}/{page_total} {rows}"
    editing = context.get('editing', 0)
    parts = [fname, page_info] if fname else [page_info]
    if editing:
        parts.append(f"{editing} editing")
    text = " " + " | ".join(parts)

    return text.ljust(width)[:width]


def snapshot_context(snapshot, file_path=None, editing=0):
    start = snapshot.page * snapshot.page_size
    return {
        'file_path': file_path,
        'page_index': snapshot.page + 1,
        'page_total': snapshot.page_count,
        'page_start': start,
        'page_end': min(snapshot.total_filtered_count, start + snapshot.page_size),
        'total_rows': snapshot.total_filtered_count,
        'editing': editing,
    }
