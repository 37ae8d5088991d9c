import docbase_sync


def test_import():
    # make sure symbols are accessible by fully qualified path
    assert isinstance(docbase_sync.core.client.Client, type)
    assert isinstance(docbase_sync.core.model.NoteRecord, type)
    assert issubclass(
        docbase_sync.core.exceptions.ParseError,
        docbase_sync.core.exceptions.DocBaseSyncError,
    )
    assert callable(docbase_sync.core.transcode.parse_document)
    assert callable(docbase_sync.core.sync.pull)

    # ensure no internal symbols accidentally exported
    assert all([not sym.startswith("_") for sym in docbase_sync.__all__])
