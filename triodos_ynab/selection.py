def _row_date(row):
    return row.date


def select_since(rows, checkpoint, date_of=_row_date):
    """
    Keep the rows dated strictly after the checkpoint, in their original order.

    `date_of` must be cheap: this runs before the detail view of each row is
    opened, so it is what keeps a sync from clicking through months of
    transactions YNAB already has.
    """
    since = checkpoint.last_import_date
    return [row for row in rows if date_of(row) > since]
