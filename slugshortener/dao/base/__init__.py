from slugshortener.dao.base.short_url_base_dao import ShortURLBaseDAO


__all__ = ['ShortURLBaseDAO']
