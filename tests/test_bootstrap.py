from src.site_ledger.site_ledger.database.bootstrap import split_statements


def test_split_statements_ignores_semicolons_in_strings_and_comments():
    sql = """
    -- demo data; not a statement
    INSERT INTO projects (name) VALUES ('Tower; A');
    INSERT INTO workers (name) VALUES ("O\\"Neil;");

    """

    assert split_statements(sql) == [
        "INSERT INTO projects (name) VALUES ('Tower; A')",
        'INSERT INTO workers (name) VALUES ("O\\"Neil;")',
    ]
