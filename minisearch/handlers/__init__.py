"""Flask view builders for articles, authors, tags and search."""